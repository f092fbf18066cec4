"""Error taxonomy shared by the data-access layer and the HTTP handlers.

Every error carries the HTTP status it maps to and the message shown to the
caller. The API renders them as ``{"error": message}``.
"""


class AppError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class AuthError(AppError):
    """Missing token (401), bad or expired token (403), wrong principal (403)."""
    status_code = 401
    message = "Access token required"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class ConflictError(AppError):
    # duplicate email is reported as a plain bad request
    status_code = 400
    message = "Conflict"


class StoreError(AppError):
    status_code = 500
    message = "Database error"
