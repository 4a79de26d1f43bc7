"""Domain errors raised by the services and mapped to HTTP responses in main.py."""

from fastapi import status


class JobBoardError(Exception):
    """Base exception for every error the API reports to clients."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(JobBoardError):
    """Raised for malformed or missing input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(JobBoardError):
    """Raised when the bearer token is missing, invalid or expired."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class ForbiddenError(JobBoardError):
    """Raised when an authenticated actor has the wrong role."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFoundError(JobBoardError):
    """Raised for missing records and for records the actor does not own."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(JobBoardError):
    """Raised when a write would break a uniqueness rule."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class DuplicateEmailError(ConflictError):
    """Raised when registering an email that already has an account."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class InternalError(JobBoardError):
    """Raised when the persistence layer fails unexpectedly."""
