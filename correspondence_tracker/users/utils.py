# correspondence_tracker/users/utils.py

from typing import Iterable

from fastapi import HTTPException, status, Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from correspondence_tracker.core.db import get_db
from correspondence_tracker.core.jwt import verify_token
from correspondence_tracker.users.repository import UserRepository
from correspondence_tracker.users.models import User
from correspondence_tracker.users.schemas import ActingUser, MUTATING_ROLES
from correspondence_tracker.utils.logger import get_logger

logger = get_logger(__name__)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="login")


def can_mutate(role: str) -> bool:
    """Whether a role may create or update correspondence."""
    return (role or "").lower() in MUTATING_ROLES


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated user from the JWT token.
    """
    payload = verify_token(token)
    email = payload.get("sub")
    if email is None:
        logger.error("Token payload missing 'sub' field")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials."
        )

    user = UserRepository(db).get_user_by_email(email)

    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive."
        )

    return user


def get_acting_user(current_user: User = Depends(get_current_user)) -> ActingUser:
    """Reduce the authenticated user to the identity passed into services."""
    return ActingUser(id=current_user.id, role=current_user.role)


class RoleChecker:
    """
    RBAC dependency that checks if the current user has any of the allowed roles.
    """
    def __init__(self, allowed_roles: Iterable[str]):
        self.allowed_roles = {role.lower() for role in allowed_roles}

    def __call__(self, acting_user: ActingUser = Depends(get_acting_user)) -> ActingUser:
        """Check the acting user's role and hand the identity on."""
        if acting_user.role.lower() not in self.allowed_roles:
            logger.warning(
                "User does not have required roles",
                user_id=acting_user.id, role=acting_user.role,
                required_roles=sorted(self.allowed_roles),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action."
            )
        return acting_user


# Admins and managers may create and update correspondence
require_mutation_rights = RoleChecker(MUTATING_ROLES)
