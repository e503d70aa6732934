## correspondence_tracker/activity_log/router.py

# Third party imports
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

# Local imports
from correspondence_tracker.core.db import get_db
from correspondence_tracker.utils.logger import get_logger
from correspondence_tracker.activity_log.schemas import ActivityLogListResponse
from correspondence_tracker.activity_log.services import activity_log_service
from correspondence_tracker.correspondence.repository import CorrespondenceRepository
from correspondence_tracker.users.models import User
from correspondence_tracker.users.utils import get_current_user

logger = get_logger(__name__)
router = APIRouter(tags=["Activity Log"], prefix="/correspondence")


@router.get("/{correspondence_id}/activity", response_model=ActivityLogListResponse)
def list_activity(
    correspondence_id: int,
    db: Session = Depends(get_db),
    logged_in_user: User = Depends(get_current_user),
):
    """Status and priority history for a correspondence, newest first"""
    try:
        if not CorrespondenceRepository(db).exists(correspondence_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Correspondence with ID {correspondence_id} not found",
            )
        entries = activity_log_service.get_activity_for_correspondence(db, correspondence_id)
        return {"items": entries, "total_items": len(entries)}
    except SQLAlchemyError as e:
        logger.error("Error listing activity", correspondence_id=correspondence_id, error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unavailable") from e
