## correspondence_tracker/activity_log/models.py

# Standard library imports
from datetime import datetime
from typing import Optional

# Third party imports
from sqlalchemy import String, Text, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

# Local imports
from correspondence_tracker.core.db import Base
from correspondence_tracker.users.models import User


class ActivityLog(Base):
    """
    Append-only audit entry for a correspondence.
    Rows are only ever inserted, as a side effect of a tracked field change.
    """
    __tablename__ = "activity_log"

    __table_args__ = (
        Index("idx_activity_log_correspondence", "correspondence_id", "created_on"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    correspondence_id: Mapped[int] = mapped_column(
        ForeignKey("correspondence.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    previous_value: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    new_value: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    correspondence = relationship("Correspondence", back_populates="activity")
    user: Mapped[User] = relationship(User, foreign_keys=[user_id], lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<ActivityLog(id={self.id}, correspondence_id={self.correspondence_id}, "
            f"action={self.action}, {self.previous_value} -> {self.new_value})>"
        )
