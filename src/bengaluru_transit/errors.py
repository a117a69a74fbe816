"""
Error taxonomy for the transit client.

Every failure carries a stable ``code`` so callers branch on the
discriminator instead of the message text. Validation failures list every
violated field, never just the first one.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationIssue:
    """One violated leaf: dotted field path plus a readable message."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class TransitError(Exception):
    """Base exception for all transit client failures."""

    code = "TRANSIT_ERROR"

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class TransitValidationError(TransitError):
    """Raised when a value fails a validation contract."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        details: list[ValidationIssue] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause)
        self.details = list(details or [])

    def __str__(self) -> str:
        if not self.details:
            return self.message
        lines = "; ".join(str(issue) for issue in self.details)
        return f"{self.message} ({lines})"


class ParameterValidationError(TransitValidationError):
    """Caller arguments fail the input contract. Nothing was sent upstream."""

    code = "PARAMETER_VALIDATION_ERROR"


class ResponseValidationError(TransitValidationError):
    """Upstream payload fails the response contract. Never retried."""

    code = "RESPONSE_VALIDATION_ERROR"


class GeometryValidationError(TransitValidationError):
    """A coordinate falls outside WGS84 bounds or a geometry is malformed."""

    code = "GEOMETRY_VALIDATION_ERROR"


class TransportError(TransitError):
    """Network or HTTP failure reported by the transport."""

    code = "TRANSPORT_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause)
        self.status_code = status_code


class CategoryMappingError(TransitError):
    """A category table is not a bijection, or a lookup has no entry."""

    code = "CATEGORY_MAPPING_ERROR"
