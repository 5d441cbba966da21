from typing import Any, Mapping, Optional


class JinaqError(Exception):
    """Base class for errors raised by services and adapters.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: machine-readable error code used in the error envelope
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Internal error"
    default_code = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(JinaqError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class InvalidHostHeaderError(ServiceValidationError):
    """Raised when the Host header is not in the configured allow-list."""

    default_message = "Invalid Host Header"
    default_code = "INVALID_HOST_HEADER"


class NotFoundError(JinaqError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class StorageError(JinaqError):
    """Raised when the object store rejects or fails an upload or delete."""

    http_status = 502
    default_message = "Object storage request failed"
    default_code = "STORAGE_ERROR"
