# correspondence_tracker/users/services.py

from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from correspondence_tracker.core.db import get_db
from correspondence_tracker.users.models import User
from correspondence_tracker.users.repository import UserRepository
from correspondence_tracker.users.schemas import LoginRequest
from correspondence_tracker.utils.general import utcnow
from correspondence_tracker.utils.security import verify_password
from correspondence_tracker.utils.logger import get_logger

logger = get_logger(__name__)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Dependency to get UserRepository instance."""
    return UserRepository(db)


class UserService:
    """
    Business logic layer for user-related operations.
    Depends on the UserRepository for data access.
    """

    def __init__(self, repo: UserRepository = Depends(get_user_repository)):
        self.repo = repo

    def authenticate_user(self, login_data: LoginRequest) -> Optional[User]:
        """Authenticate user by email and password."""
        user = self.repo.get_user_by_email(login_data.email_id)

        if not user or not user.is_active or not verify_password(login_data.password, user.password):
            logger.warning("Authentication failed for email", email=login_data.email_id)
            return None

        user.last_login = utcnow()
        self.repo.update(user)
        logger.info("User authenticated", user_id=user.id, role=user.role)
        return user

    def list_active_users(self) -> List[User]:
        """Active users for assignment lookups."""
        return self.repo.get_active_users()
