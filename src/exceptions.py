"""Domain exceptions translated into HTTP error responses."""

from fastapi import status


class TrustMeError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationFailed(TrustMeError):
    """Malformed or missing input, or a violated field constraint."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotAuthenticated(TrustMeError):
    """Missing, invalid or expired credential, or an inactive account."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(TrustMeError):
    """Caller is authenticated but lacks the role or ownership required."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFound(TrustMeError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(TrustMeError):
    """The write would violate a uniqueness rule."""

    status_code = status.HTTP_409_CONFLICT


class DuplicateEmail(ValidationFailed):
    def __init__(self, email: str):
        self.email = email
        super().__init__("Email already registered")


class UploadRejected(ValidationFailed):
    """An uploaded batch violated the count, type or size limits."""
