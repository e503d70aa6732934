## correspondence_tracker/departments/services.py

# Standard library imports
from typing import List

# Third party imports
from sqlalchemy import select, asc
from sqlalchemy.orm import Session

# Local imports
from correspondence_tracker.utils.logger import get_logger
from correspondence_tracker.departments.models import Department

logger = get_logger(__name__)


class DepartmentService:
    """Service for department lookups"""

    def list_departments(self, db: Session) -> List[Department]:
        """All departments ordered by name"""
        try:
            stmt = select(Department).order_by(asc(Department.name))
            return list(db.execute(stmt).scalars().all())
        except Exception as e:
            logger.error("Error listing departments", error=str(e))
            raise e


department_service = DepartmentService()
