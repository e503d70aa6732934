# correspondence_tracker/users/router.py

from fastapi import APIRouter, Depends, Header, HTTPException, status

from correspondence_tracker.core.jwt import create_access_token, create_refresh_token, verify_token
from correspondence_tracker.users.models import User
from correspondence_tracker.users.schemas import (
    CurrentUserResponse, LoginRequest, TokenResponse, UserListResponse, UserResponse,
)
from correspondence_tracker.users.services import UserService
from correspondence_tracker.users.utils import can_mutate, get_current_user
from correspondence_tracker.utils.logger import get_logger

router = APIRouter(tags=["Users"])
logger = get_logger(__name__)


def _issue_tokens(user: User) -> dict:
    claims = {"sub": user.email_address, "id": user.id, "role": user.role}
    return {
        "access_token": create_access_token(data=claims),
        "refresh_token": create_refresh_token(data=claims),
        "token_type": "bearer",
    }


@router.post("/login", response_model=TokenResponse)
def login(
    login_request: LoginRequest,
    user_service: UserService = Depends(),
):
    """Authenticate user and return access & refresh tokens."""
    user = user_service.authenticate_user(login_request)

    if not user:
        logger.warning("Failed login attempt", email=login_request.email_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password."
        )

    return _issue_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
def refresh_access_token(
    authorization: str = Header(..., alias="Authorization"),
    user_service: UserService = Depends(),
):
    """Refresh the access token using a valid refresh token."""
    old_refresh_token = authorization.replace("Bearer ", "")
    payload = verify_token(old_refresh_token, expected_type="refresh")
    email = payload.get("sub")

    user = user_service.repo.get_user_by_email(email)
    if not user or not user.is_active:
        logger.warning("Invalid refresh token attempt", email=email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token."
        )

    return _issue_tokens(user)


@router.get("/user", response_model=CurrentUserResponse)
def get_user_me(
    current_user: User = Depends(get_current_user),
):
    """Get details of the currently authenticated user."""
    return CurrentUserResponse(
        **UserResponse.model_validate(current_user).model_dump(),
        can_mutate=can_mutate(current_user.role),
    )


@router.get("/users", response_model=UserListResponse)
def list_users(
    user_service: UserService = Depends(),
    _: User = Depends(get_current_user),
):
    """Active users, ordered by name, for assignment pickers."""
    users = user_service.list_active_users()
    return {"items": users, "total_items": len(users)}
