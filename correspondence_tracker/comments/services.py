## correspondence_tracker/comments/services.py

# Standard library imports
from typing import List

# Third party imports
from sqlalchemy import select, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

# Local imports
from correspondence_tracker.utils.general import utcnow
from correspondence_tracker.utils.logger import get_logger
from correspondence_tracker.comments.exceptions import CommentValidationException
from correspondence_tracker.comments.models import Comment
from correspondence_tracker.correspondence.repository import CorrespondenceRepository
from correspondence_tracker.correspondence.exceptions import CorrespondenceNotFoundException

logger = get_logger(__name__)


class CommentService:
    """Service for comment operations"""

    def _ensure_correspondence(self, db: Session, correspondence_id: int) -> None:
        if not CorrespondenceRepository(db).exists(correspondence_id):
            raise CorrespondenceNotFoundException(correspondence_id)

    def list_comments(self, db: Session, correspondence_id: int) -> List[Comment]:
        """Comments for one correspondence, newest first"""
        self._ensure_correspondence(db, correspondence_id)
        stmt = (
            select(Comment)
            .where(Comment.correspondence_id == correspondence_id)
            .order_by(desc(Comment.created_on), desc(Comment.id))
        )
        return list(db.execute(stmt).scalars().all())

    def add_comment(
        self, db: Session,
        correspondence_id: int,
        author_id: int,
        content: str,
        is_internal: bool = True,
    ) -> Comment:
        """
        Append a comment to a correspondence.
        Content is trimmed and must not be empty. No activity entry is written.
        """
        content = (content or "").strip()
        if not content:
            raise CommentValidationException()

        self._ensure_correspondence(db, correspondence_id)

        now = utcnow()
        try:
            comment = Comment(
                correspondence_id=correspondence_id,
                user_id=author_id,
                content=content,
                is_internal=is_internal,
                created_on=now,
                updated_on=now,
            )
            db.add(comment)
            db.commit()
            db.refresh(comment)
            logger.info(
                "Comment added",
                correspondence_id=correspondence_id, comment_id=comment.id,
                user_id=author_id, is_internal=is_internal,
            )
            return comment
        except IntegrityError as e:
            db.rollback()
            logger.warning(
                "Comment rejected by constraint",
                correspondence_id=correspondence_id, user_id=author_id, error=str(e),
            )
            raise CommentValidationException("Comment author does not exist", field="user_id") from e
        except Exception as e:
            db.rollback()
            logger.error("Error adding comment", correspondence_id=correspondence_id, error=str(e))
            raise e


comment_service = CommentService()
