from typing import Any, Mapping, Optional


class StoreError(Exception):
    """Base class for every error raised by the data store.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, offending values)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Data store error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(StoreError):
    """Raised when input data is invalid or a constraint would be violated.

    Missing required fields, unknown fields, bad values and immutable entities all
    end up here. Never retried: the caller has to change the request.
    """

    http_status = 400
    default_message = "Invalid input"


class ConflictError(ServiceValidationError):
    """Raised when a uniqueness constraint would be violated (duplicate e-mail, tag
    name, category name or slug, second nutrition record for a recipe).

    Subclass of ServiceValidationError so callers may treat both alike.
    """

    http_status = 409
    default_message = "Conflict"


class InvalidReferenceError(StoreError):
    """Raised when a foreign key points at a row that does not exist."""

    http_status = 422
    default_message = "Referenced entity does not exist"


class NotFoundError(StoreError):
    """Raised when the target of an operation was not found."""

    http_status = 404
    default_message = "Not found"


class StorageUnavailableError(StoreError):
    """Raised when the backing database is unreachable, closed or timed out.

    The only error eligible for caller-initiated retries with backoff.
    """

    http_status = 503
    default_message = "Storage unavailable"
