# correspondence_tracker/core/jwt.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt, ExpiredSignatureError
from fastapi import HTTPException, status

from correspondence_tracker.core.config import settings
from correspondence_tracker.utils.logger import get_logger

logger = get_logger(__name__)

# --- JWT Token Management ---

def _encode(data: dict, expire: datetime, token_type: str) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": expire, "type": token_type})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create an access token"""
    try:
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
        return _encode(data, datetime.now(timezone.utc) + expires_delta, "access")
    except Exception as e:
        logger.error("Error creating access token", error_message=str(e))
        raise e


def create_refresh_token(data: dict) -> str:
    """Create a refresh token"""
    try:
        expire = datetime.now(timezone.utc) + timedelta(days=settings.refresh_token_expire_days)
        return _encode(data, expire, "refresh")
    except Exception as e:
        logger.error("Error creating refresh token", error_message=str(e))
        raise e


def verify_token(token: str, expected_type: str = "access") -> dict:
    """
    Verify a token and return its payload.
    Raises 401 for expired, malformed or wrongly typed tokens.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError as ese:
        logger.warning("Token has expired.")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from ese
    except JWTError as e:
        logger.warning("Error verifying token", error_message=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials.",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    if payload.get("type") != expected_type:
        logger.warning("Unexpected token type", token_type=payload.get("type"), expected=expected_type)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload
