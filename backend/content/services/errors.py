from typing import Dict


class ContentError(ValueError):
    """Base error for content operations; carries a stable code and HTTP status."""

    default_code = "CONTENT_ERROR"
    default_status = 400

    def __init__(self, message: str, *, code: str = None, http_status: int = None):
        super().__init__(message)
        self.code = code or self.default_code
        self.http_status = http_status or self.default_status

    def to_payload(self) -> Dict:
        return {"error": str(self), "code": self.code}


class NotFoundError(ContentError):
    default_code = "NOT_FOUND"
    default_status = 404


class PayloadValidationError(ContentError):
    default_code = "VALIDATION_ERROR"
    default_status = 400


class ConflictError(ContentError):
    default_code = "CONFLICT"
    default_status = 409


class StructuredFieldError(ContentError):
    """A stored JSON column could not be decoded. This is a data-integrity problem."""

    default_code = "DECODE_ERROR"
    default_status = 500

    def __init__(self, message: str, *, field: str = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field


class AuthError(ContentError):
    default_code = "UNAUTHORIZED"
    default_status = 401


class UpstreamError(ContentError):
    """Email or storage failure. Logged, never surfaced to the request."""

    default_code = "UPSTREAM_ERROR"
    default_status = 502
