## correspondence_tracker/departments/router.py

# Third party imports
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

# Local imports
from correspondence_tracker.core.db import get_db
from correspondence_tracker.utils.logger import get_logger
from correspondence_tracker.departments.schemas import DepartmentListResponse
from correspondence_tracker.departments.services import department_service
from correspondence_tracker.users.models import User
from correspondence_tracker.users.utils import get_current_user

logger = get_logger(__name__)
router = APIRouter(tags=["Departments"])


@router.get("/departments", response_model=DepartmentListResponse)
def list_departments(
    db: Session = Depends(get_db),
    logged_in_user: User = Depends(get_current_user),
):
    """List departments ordered by name"""
    try:
        departments = department_service.list_departments(db)
        return {"items": departments, "total_items": len(departments)}
    except Exception as e:
        logger.error("Error listing departments", error=str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
