## correspondence_tracker/correspondence/models.py

# Standard library imports
from datetime import datetime
from typing import List, Optional

# Third party imports
from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

# Local imports
from correspondence_tracker.core.db import Base
from correspondence_tracker.departments.models import Department
from correspondence_tracker.users.models import AuditMixin, User
from correspondence_tracker.correspondence.schemas import (
    CorrespondencePriority, CorrespondenceStatus, CorrespondenceType,
)


def _enum_column(enum_cls, name: str) -> Enum:
    # Persist the lowercase values, not the member names
    return Enum(
        enum_cls, name=name, native_enum=True, validate_strings=True,
        values_callable=lambda members: [member.value for member in members],
    )


class Correspondence(Base, AuditMixin):
    """
    Tracked inbound correspondence.

    Aggregate root for its comments and activity log. The triage bucket and
    due badge are derived at read time and never stored here.
    """
    __tablename__ = "correspondence"

    __table_args__ = (
        Index("idx_correspondence_status", "status"),
        Index("idx_correspondence_priority", "priority"),
        Index("idx_correspondence_due_date", "due_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    reference_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    type: Mapped[CorrespondenceType] = mapped_column(
        _enum_column(CorrespondenceType, "correspondence_type"), nullable=False
    )
    priority: Mapped[CorrespondencePriority] = mapped_column(
        _enum_column(CorrespondencePriority, "correspondence_priority"),
        nullable=False, default=CorrespondencePriority.NORMAL,
    )
    status: Mapped[CorrespondenceStatus] = mapped_column(
        _enum_column(CorrespondenceStatus, "correspondence_status"),
        nullable=False, default=CorrespondenceStatus.PENDING,
    )

    sender_name: Mapped[str] = mapped_column(String(255), nullable=False)
    sender_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    sender_phone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    sender_organization: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    sender_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    received_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Stamped whenever status is set to completed"
    )

    assigned_to_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    department_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("departments.id", ondelete="SET NULL"), nullable=True
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    assigned_to: Mapped[Optional[User]] = relationship(User, foreign_keys=[assigned_to_id], lazy="selectin")
    department: Mapped[Optional[Department]] = relationship(Department, lazy="selectin")
    comments: Mapped[List["Comment"]] = relationship(
        "Comment", back_populates="correspondence",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    activity: Mapped[List["ActivityLog"]] = relationship(
        "ActivityLog", back_populates="correspondence",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Correspondence(id={self.id}, "
            f"reference_number={self.reference_number}, "
            f"status={self.status}, "
            f"priority={self.priority})>"
        )
