"""
Error taxonomy for the User Directory.

Every failure the core can report is a `DirectoryError` subclass carrying the
HTTP status it maps to and a user-visible message. The API layer registers a
single exception handler for the base class, so business code never imports
FastAPI.
"""


class DirectoryError(Exception):
    """Base class for user-visible directory failures."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class NotFound(DirectoryError):
    """Positional index is out of range for the current collection."""

    status_code = 404
    message = "User not found"


class Forbidden(DirectoryError):
    """The caller's identity does not own the addressed record."""

    status_code = 403
    message = "Forbidden"


class Unauthenticated(DirectoryError):
    """Session token missing or unknown."""

    status_code = 401
    message = "Unauthenticated"


class PersistenceFailure(DirectoryError):
    """Writing the collection to the backing store failed."""

    status_code = 500
    message = "Failed to persist users"


class Internal(DirectoryError):
    status_code = 500
    message = "Internal server error"
