# correspondence_tracker/users/repository.py

from typing import List, Optional

from sqlalchemy import select, asc
from sqlalchemy.orm import Session

from correspondence_tracker.users.models import User


class UserRepository:
    """
    Data Access Layer for the User model.
    Handles all database interactions.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Fetch a user by email address."""
        stmt = select(User).where(User.email_address == email)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Fetch a user by ID."""
        stmt = select(User).where(User.id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_active_users(self) -> List[User]:
        """Fetch all active users ordered by name."""
        stmt = select(User).where(User.is_active.is_(True)).order_by(asc(User.name))
        return list(self.db.execute(stmt).scalars().all())

    def update(self, user: User) -> User:
        """Persist changes to an existing user."""
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
