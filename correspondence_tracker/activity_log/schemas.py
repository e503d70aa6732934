## correspondence_tracker/activity_log/schemas.py

# Standard library imports
from enum import Enum as PyEnum
from datetime import datetime
from typing import List, Optional

# Third party imports
from pydantic import BaseModel, ConfigDict


class ActivityAction(str, PyEnum):
    """Activity log actions written by the mutation pipeline"""
    STATUS_CHANGE = "status_change"
    PRIORITY_CHANGE = "priority_change"


class ActivityUser(BaseModel):
    """Author of an activity entry"""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ActivityLogResponse(BaseModel):
    """Activity log entry"""
    id: int
    correspondence_id: int
    user_id: int
    action: str
    description: str
    previous_value: Optional[str] = None
    new_value: Optional[str] = None
    created_on: Optional[datetime] = None
    user: Optional[ActivityUser] = None

    model_config = ConfigDict(from_attributes=True)


class ActivityLogListResponse(BaseModel):
    """Activity log for one correspondence, newest first"""
    items: List[ActivityLogResponse]
    total_items: int
