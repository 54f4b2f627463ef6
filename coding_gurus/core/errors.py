"""Application error types.

Every failure that reaches the browser is expressed as an ``AppError``: a
human readable message plus the HTTP status the error page is served with.
The handlers that render them are registered in ``coding_gurus.main``.
"""

from fastapi import status

DEFAULT_MESSAGE = "Something went wrong!"


class AppError(Exception):
    """Base error carrying a message and a status code."""

    def __init__(self, message: str = DEFAULT_MESSAGE, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message or DEFAULT_MESSAGE
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Submitted form failed validation (400)."""

    def __init__(self, message: str):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class NotFoundError(AppError):
    """Route or record does not exist (404)."""

    def __init__(self, message: str = "Page not found!"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class UnexpectedError(AppError):
    """Anything else (500)."""

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)
