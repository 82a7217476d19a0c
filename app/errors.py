"""Application error taxonomy

Each error carries a short message that is safe to show to the user.
"""
from typing import Optional


class AppError(Exception):
    """Base class for errors surfaced to the user"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthenticatedError(AppError):
    """No active session"""

    def __init__(self, message: str = "Please log in to continue"):
        super().__init__(message)


class InvalidInputError(AppError):
    """Input rejected before any backend call (empty title, bad file type/size)"""


class BackendCallError(AppError):
    """Network failure or non-2xx answer from a backend endpoint"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
