"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; the handler registered in
``maidhub.main`` turns them into ``{"success": false, "message": ...}`` responses.
"""


class MaidHubError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MaidHubError):
    """Malformed or out-of-range input (weekday, time format, ranges, past dates, duplicates)"""

    status_code = 400


class PermissionDeniedError(MaidHubError):
    """Caller is authenticated but not allowed to act on the resource"""

    status_code = 403


class NotFoundError(MaidHubError):
    """Unknown maid, booking, category or blocked slot"""

    status_code = 404


class ConflictError(MaidHubError):
    """Requested time overlaps an existing commitment"""

    status_code = 409
