# correspondence_tracker/utils/security.py

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored bcrypt hash.
    Users without a stored hash can never authenticate.
    """
    if not hashed_password:
        return False
    return pwd_context.verify(password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password for storage"""
    return pwd_context.hash(password)
