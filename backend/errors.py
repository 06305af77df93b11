"""
Error taxonomy for the entry service.

Each error carries the HTTP status the API layer should answer with and
the message placed in the `{"error": ...}` body. None of them are fatal:
`main.py` turns every `ServiceError` into a JSON response.
"""


class ServiceError(Exception):
    """Base class for errors surfaced to API clients.

    Attributes:
        message: Human-readable message returned in the response body
        status_code: HTTP status code for the response
    """

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DecodeError(ServiceError):
    """Request body is not well-formed JSON for an entry."""

    status_code = 400

    def __init__(self, message: str = "invalid JSON") -> None:
        super().__init__(message)


class EntryValidationError(ServiceError):
    """Decoded entry breaks a level, location or timestamp rule."""

    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404

    def __init__(self, entry_id: str) -> None:
        super().__init__("not found")
        self.entry_id = entry_id
