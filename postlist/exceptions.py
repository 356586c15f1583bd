"""
Custom exception classes for the application.

Every exception carries an ``http_status`` so that the HTTP layer can turn
domain errors into responses without knowing about each one individually.
Only ``StatisticsUnavailableError`` is ever recovered inside the core; the
others propagate to the caller unchanged.
"""


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        http_status: HTTP status code for REST API responses.
    """

    http_status: int = 500

    def __init__(self, message: str):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class NotFoundError(AppException):
    """
    Resource not found.

    Raised when a lookup by identity yields no non-deleted record. A
    soft-deleted record is reported exactly like a non-existent one.

    HTTP Status: 404 Not Found
    """

    http_status = 404


class InvalidSortError(AppException):
    """
    Sort column or direction outside the allow-list.

    Raised before any store access.

    HTTP Status: 400 Bad Request
    """

    http_status = 400


class InvalidCursorError(AppException):
    """
    Cursor token cannot be decoded for the requested sort column.

    Raised before any store access.

    HTTP Status: 400 Bad Request
    """

    http_status = 400


class StatisticsUnavailableError(AppException):
    """
    Store statistics lookup failed or timed out.

    Always recovered by the count estimator, which falls back to an exact
    count. Never surfaced to callers.

    HTTP Status: 503 Service Unavailable
    """

    http_status = 503


class StoreFailureError(AppException):
    """
    Row fetch or exact count failed in the store.

    Terminal for the request; not retried.

    HTTP Status: 500 Internal Server Error
    """

    http_status = 500
