# correspondence_tracker/correspondence/exceptions.py

"""
Custom exceptions for the Correspondence module.
"""

from typing import Optional


class CorrespondenceBaseException(Exception):
    """Base exception for all Correspondence-related errors."""
    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CorrespondenceNotFoundException(CorrespondenceBaseException):
    """Raised when a correspondence does not exist."""
    def __init__(self, correspondence_id: int):
        self.correspondence_id = correspondence_id
        super().__init__(
            f"Correspondence with ID {correspondence_id} not found",
            {"correspondence_id": correspondence_id},
        )


class CorrespondenceValidationException(CorrespondenceBaseException):
    """Raised when a correspondence payload fails validation."""
    pass


class CorrespondenceDuplicateException(CorrespondenceBaseException):
    """Raised when a reference number is already taken."""
    def __init__(self, reference_number: Optional[str] = None):
        msg = (
            f"Correspondence with reference number {reference_number} already exists"
            if reference_number else "Could not allocate a unique reference number"
        )
        super().__init__(msg, {"reference_number": reference_number})


class CorrespondenceStoreException(CorrespondenceBaseException):
    """Raised when the database rejects or fails a correspondence write."""
    pass
