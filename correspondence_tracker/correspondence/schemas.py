## correspondence_tracker/correspondence/schemas.py

"""
Pydantic schemas for the Correspondence module.
"""

# Standard library imports
from datetime import datetime
from enum import Enum
from typing import List, Optional

# Third party imports
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Local imports
from correspondence_tracker.activity_log.schemas import ActivityLogResponse
from correspondence_tracker.departments.schemas import DepartmentSummary
from correspondence_tracker.users.schemas import UserSummary


# === Enums ===

class CorrespondenceType(str, Enum):
    """Kind of inbound correspondence"""
    LETTER = "letter"
    EMAIL = "email"
    REQUEST = "request"
    SUBMISSION = "submission"
    COMPLAINT = "complaint"
    INQUIRY = "inquiry"
    OTHER = "other"


class CorrespondencePriority(str, Enum):
    """Correspondence priority"""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class CorrespondenceStatus(str, Enum):
    """Correspondence lifecycle status"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class DueBucket(str, Enum):
    """Triage bucket derived from the due date"""
    OVERDUE = "overdue"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    BEYOND = "beyond"
    COMPLETED = "completed"


class BadgeUrgency(str, Enum):
    """Visual urgency of a due badge"""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


# === Request schemas ===

def _require_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class CorrespondenceCreate(BaseModel):
    """Schema for creating correspondence"""
    reference_number: Optional[str] = Field(None, max_length=32)
    subject: str = Field(..., max_length=255)
    description: str
    type: CorrespondenceType
    priority: CorrespondencePriority = CorrespondencePriority.NORMAL
    status: CorrespondenceStatus = CorrespondenceStatus.PENDING

    sender_name: str = Field(..., max_length=255)
    sender_email: Optional[str] = Field(None, max_length=255)
    sender_phone: Optional[str] = Field(None, max_length=64)
    sender_organization: Optional[str] = Field(None, max_length=255)
    sender_address: Optional[str] = None

    received_date: Optional[datetime] = None
    due_date: datetime
    completed_date: Optional[datetime] = None

    assigned_to_id: Optional[int] = None
    department_id: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("subject", "description", "sender_name")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        """Required text fields may not be blank."""
        return _require_text(v)


class CorrespondenceUpdate(BaseModel):
    """
    Merge patch for correspondence.

    Only keys present in the request are applied. An explicit null clears
    nullable fields (assignment, department, notes, sender contact details)
    and is ignored for required ones.
    """
    subject: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    type: Optional[CorrespondenceType] = None
    priority: Optional[CorrespondencePriority] = None
    status: Optional[CorrespondenceStatus] = None

    sender_name: Optional[str] = Field(None, max_length=255)
    sender_email: Optional[str] = Field(None, max_length=255)
    sender_phone: Optional[str] = Field(None, max_length=64)
    sender_organization: Optional[str] = Field(None, max_length=255)
    sender_address: Optional[str] = None

    received_date: Optional[datetime] = None
    due_date: Optional[datetime] = None

    assigned_to_id: Optional[int] = None
    department_id: Optional[int] = None
    notes: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("subject", "description", "sender_name")
    @classmethod
    def validate_required_text(cls, v: Optional[str]) -> Optional[str]:
        """Required text fields may be omitted but not blanked."""
        return _require_text(v)


class CorrespondenceFilters(BaseModel):
    """Filters for the correspondence list and triage views"""
    search: Optional[str] = None
    status: Optional[CorrespondenceStatus] = None
    priority: Optional[CorrespondencePriority] = None
    type: Optional[CorrespondenceType] = None
    due_group: Optional[DueBucket] = None


# === Response schemas ===

class CorrespondenceResponse(BaseModel):
    """Schema for correspondence response"""
    id: int
    reference_number: str
    subject: str
    description: str
    type: CorrespondenceType
    priority: CorrespondencePriority
    status: CorrespondenceStatus

    sender_name: str
    sender_email: Optional[str] = None
    sender_phone: Optional[str] = None
    sender_organization: Optional[str] = None
    sender_address: Optional[str] = None

    received_date: datetime
    due_date: datetime
    completed_date: Optional[datetime] = None

    assigned_to_id: Optional[int] = None
    department_id: Optional[int] = None
    assigned_to: Optional[UserSummary] = None
    department: Optional[DepartmentSummary] = None
    notes: Optional[str] = None

    created_by: Optional[int] = None
    modified_by: Optional[int] = None
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class DueBadgeResponse(BaseModel):
    """Urgency badge shown next to the due date"""
    label: str
    urgency: BadgeUrgency

    model_config = ConfigDict(from_attributes=True)


class CorrespondenceListItem(CorrespondenceResponse):
    """Correspondence row with its derived due-date fields"""
    days_until_due: int
    due_bucket: DueBucket
    due_badge: Optional[DueBadgeResponse] = None


class CorrespondenceListResponse(BaseModel):
    """Schema for correspondence list"""
    items: List[CorrespondenceListItem]
    total_items: int


class TriageGroupResponse(BaseModel):
    """One triage bucket with its items in due-date order"""
    bucket: DueBucket
    label: str
    total_items: int
    items: List[CorrespondenceListItem]


class TriageResponse(BaseModel):
    """Triage view grouped by due bucket"""
    generated_at: datetime
    total_items: int
    groups: List[TriageGroupResponse]


class CorrespondenceUpdateResponse(CorrespondenceResponse):
    """Updated correspondence plus the audit entries written for it"""
    audit_complete: bool = True
    activity: List[ActivityLogResponse] = []


class CorrespondenceStats(BaseModel):
    """Aggregate counts by status and priority"""
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    overdue: int = 0
    urgent: int = 0
    high: int = 0
    normal: int = 0
    low: int = 0
