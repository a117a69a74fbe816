"""
Schema validation for caller parameters and upstream payloads.

Every pydantic failure is translated into one of the package's own
validation errors, with one ``ValidationIssue`` per violated leaf. The
pydantic ``ValidationError`` never escapes this module.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from bengaluru_transit.errors import (
    ParameterValidationError,
    ResponseValidationError,
    TransitValidationError,
    ValidationIssue,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ROOT_PATH = "(root)"


def format_location(loc: tuple[Any, ...]) -> str:
    """Dotted path for a pydantic error location, "(root)" when empty."""
    if not loc:
        return ROOT_PATH
    return ".".join(str(part) for part in loc)


def issues_from_error(error: ValidationError) -> list[ValidationIssue]:
    """One issue per pydantic error, in pydantic's reporting order."""
    return [
        ValidationIssue(path=format_location(item["loc"]), message=item["msg"])
        for item in error.errors()
    ]


def validate(
    contract: type[M],
    value: Any,
    *,
    error_cls: type[TransitValidationError],
    message: str,
    context: dict[str, Any] | None = None,
) -> M:
    """
    Validate ``value`` against a pydantic contract.

    Args:
        contract: Pydantic model class describing the expected shape.
        value: Raw value (usually a dict decoded from JSON or built from
            caller keyword arguments).
        error_cls: Error type raised on failure.
        message: Human-readable summary used as the error message.
        context: Optional validation context passed to model validators.

    Returns:
        Validated model instance.

    Raises:
        error_cls: With every violated field listed in ``details``.
    """
    try:
        return contract.model_validate(value, context=context)
    except ValidationError as e:
        details = issues_from_error(e)
        logger.debug(f"❌ {contract.__name__} failed with {len(details)} issue(s)")
        raise error_cls(message, details=details, cause=e) from e


def validate_params(
    contract: type[M],
    value: Any,
    message: str,
    context: dict[str, Any] | None = None,
) -> M:
    """Validate caller-supplied parameters before any request is built."""
    return validate(
        contract,
        value,
        error_cls=ParameterValidationError,
        message=message,
        context=context,
    )


def validate_response(contract: type[M], value: Any, message: str) -> M:
    """Validate a decoded upstream payload before any transform runs."""
    return validate(contract, value, error_cls=ResponseValidationError, message=message)


def try_validate(
    contract: type[M],
    value: Any,
    context: dict[str, Any] | None = None,
) -> tuple[M, None] | tuple[None, list[ValidationIssue]]:
    """
    Non-raising variant of ``validate``.

    Returns ``(model, None)`` on success and ``(None, issues)`` on failure,
    with the same issue paths ``validate`` would report.
    """
    try:
        return contract.model_validate(value, context=context), None
    except ValidationError as e:
        return None, issues_from_error(e)
