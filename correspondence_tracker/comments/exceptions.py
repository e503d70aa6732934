# correspondence_tracker/comments/exceptions.py

"""
Custom exceptions for the Comments module.
"""

from typing import Optional


class CommentBaseException(Exception):
    """Base exception for all Comment-related errors."""
    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CommentValidationException(CommentBaseException):
    """Raised when comment content is blank or the author is unknown."""
    def __init__(self, message: str = "Comment content is required", field: str = "content"):
        super().__init__(message, {"field": field})
