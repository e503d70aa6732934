## correspondence_tracker/comments/schemas.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from correspondence_tracker.users.schemas import UserSummary


class CommentCreate(BaseModel):
    """Schema for adding a comment. Blank content is rejected by the service."""
    content: str
    is_internal: bool = True


class CommentResponse(BaseModel):
    """Schema for comment response"""
    id: int
    correspondence_id: int
    user_id: int
    content: str
    is_internal: bool
    created_on: Optional[datetime] = None
    user: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)


class CommentListResponse(BaseModel):
    """Comments for one correspondence, newest first"""
    items: List[CommentResponse]
    total_items: int
