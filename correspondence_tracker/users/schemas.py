# correspondence_tracker/users/schemas.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr


class UserRole(str, Enum):
    """Roles known to the application"""
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"


# Roles allowed to create and update correspondence
MUTATING_ROLES = frozenset({UserRole.ADMIN.value, UserRole.MANAGER.value})


class ActingUser(BaseModel):
    """
    Identity of the caller performing an operation.
    Passed explicitly into services so audit entries can be attributed.
    """
    id: int
    role: str

    model_config = ConfigDict(frozen=True)


class TokenResponse(BaseModel):
    """Schema for token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    """Schema for login request."""
    email_id: EmailStr
    password: str


class UserSummary(BaseModel):
    """Compact user reference embedded in other responses."""
    id: int
    name: str
    email_address: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """Schema for user response."""
    id: int
    name: str
    email_address: EmailStr
    role: str
    department: Optional[str] = None
    is_active: bool
    last_login: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CurrentUserResponse(UserResponse):
    """The authenticated user plus what the UI may offer them."""
    can_mutate: bool = False


class UserListResponse(BaseModel):
    """Schema for the active user lookup list."""
    items: List[UserResponse]
    total_items: int
