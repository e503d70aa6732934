## correspondence_tracker/comments/models.py

# Standard library imports
from datetime import datetime

# Third party imports
from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

# Local imports
from correspondence_tracker.core.db import Base
from correspondence_tracker.users.models import User


class Comment(Base):
    """Comment on a correspondence. Comments are append-only."""
    __tablename__ = "comments"

    __table_args__ = (
        Index("idx_comments_correspondence", "correspondence_id", "created_on"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    correspondence_id: Mapped[int] = mapped_column(
        ForeignKey("correspondence.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_internal: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    correspondence = relationship("Correspondence", back_populates="comments")
    user: Mapped[User] = relationship(User, foreign_keys=[user_id], lazy="selectin")

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, correspondence_id={self.correspondence_id}, is_internal={self.is_internal})>"
