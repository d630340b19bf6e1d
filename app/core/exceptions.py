"""
Application exceptions.

Each exception carries the HTTP status code it maps to. The handler
registered in main.py turns them into {"detail": message} responses.
"""

from typing import Optional


class AppError(Exception):
    """
    Base exception class for all Jobly errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(self, message: str = "Internal server error", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        """Convert exception to dict for JSON response."""
        return {"detail": self.message}


class InvalidInputError(AppError):
    """Raised when request data is empty or malformed (400)."""

    status_code = 400

    def __init__(self, message: str = "Bad request"):
        super().__init__(message)

