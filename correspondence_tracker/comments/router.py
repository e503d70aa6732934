## correspondence_tracker/comments/router.py

# Third party imports
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

# Local imports
from correspondence_tracker.core.db import get_db
from correspondence_tracker.utils.logger import get_logger
from correspondence_tracker.comments.exceptions import CommentValidationException
from correspondence_tracker.comments.schemas import (
    CommentCreate, CommentListResponse, CommentResponse,
)
from correspondence_tracker.comments.services import comment_service
from correspondence_tracker.correspondence.exceptions import CorrespondenceNotFoundException
from correspondence_tracker.users.schemas import ActingUser
from correspondence_tracker.users.utils import get_acting_user

logger = get_logger(__name__)
router = APIRouter(tags=["Comments"], prefix="/correspondence")


@router.get("/{correspondence_id}/comments", response_model=CommentListResponse)
def list_comments(
    correspondence_id: int,
    db: Session = Depends(get_db),
    acting_user: ActingUser = Depends(get_acting_user),
):
    """Comments on a correspondence, newest first"""
    try:
        comments = comment_service.list_comments(db, correspondence_id)
        return {"items": comments, "total_items": len(comments)}
    except CorrespondenceNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except SQLAlchemyError as e:
        logger.error("Error listing comments", correspondence_id=correspondence_id, error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unavailable") from e


@router.post(
    "/{correspondence_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    correspondence_id: int,
    comment: CommentCreate,
    db: Session = Depends(get_db),
    acting_user: ActingUser = Depends(get_acting_user),
):
    """Add a comment. Any authenticated user may comment."""
    try:
        return comment_service.add_comment(
            db, correspondence_id,
            author_id=acting_user.id,
            content=comment.content,
            is_internal=comment.is_internal,
        )
    except CommentValidationException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except CorrespondenceNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except SQLAlchemyError as e:
        logger.error("Error adding comment", correspondence_id=correspondence_id, error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unavailable") from e
