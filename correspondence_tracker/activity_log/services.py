## correspondence_tracker/activity_log/services.py

# Standard library imports
from datetime import datetime
from typing import List, Optional

# Third party imports
from sqlalchemy import select, desc
from sqlalchemy.orm import Session

# Local imports
from correspondence_tracker.utils.logger import get_logger
from correspondence_tracker.activity_log.models import ActivityLog
from correspondence_tracker.activity_log.schemas import ActivityAction

logger = get_logger(__name__)

FIELD_LABELS = {
    ActivityAction.STATUS_CHANGE: "Status",
    ActivityAction.PRIORITY_CHANGE: "Priority",
}


def describe_change(action: ActivityAction, previous_value: Optional[str], new_value: Optional[str]) -> str:
    """Human readable sentence for a field transition"""
    return f"{FIELD_LABELS[action]} changed from {previous_value} to {new_value}"


class ActivityLogService:
    """Service for activity log operations"""

    def get_activity_for_correspondence(self, db: Session, correspondence_id: int) -> List[ActivityLog]:
        """Activity for one correspondence, newest first"""
        try:
            stmt = (
                select(ActivityLog)
                .where(ActivityLog.correspondence_id == correspondence_id)
                .order_by(desc(ActivityLog.created_on), desc(ActivityLog.id))
            )
            return list(db.execute(stmt).scalars().all())
        except Exception as e:
            logger.error("Error getting activity log", correspondence_id=correspondence_id, error=str(e), exc_info=True)
            raise e

    def record_change(
        self, db: Session,
        correspondence_id: int,
        user_id: int,
        action: ActivityAction,
        previous_value: Optional[str],
        new_value: Optional[str],
        created_on: datetime,
    ) -> ActivityLog:
        """
        Append one activity entry and commit it on its own.
        Failures are rolled back and re-raised to the caller.
        """
        try:
            entry = ActivityLog(
                correspondence_id=correspondence_id,
                user_id=user_id,
                action=action.value,
                description=describe_change(action, previous_value, new_value),
                previous_value=previous_value,
                new_value=new_value,
                created_on=created_on,
            )
            db.add(entry)
            db.commit()
            db.refresh(entry)
            logger.info(
                "Activity recorded",
                correspondence_id=correspondence_id, action=action.value,
                previous_value=previous_value, new_value=new_value,
            )
            return entry
        except Exception as e:
            db.rollback()
            logger.error("Error recording activity", correspondence_id=correspondence_id, action=action.value, error=str(e))
            raise e


activity_log_service = ActivityLogService()
