"""Domain exceptions and degrade-on-error boundary decorator."""

from __future__ import annotations

import copy
from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

import pydantic
from structlog import get_logger

logger = get_logger()

# Type variables for decorator
P = ParamSpec("P")
T = TypeVar("T")


class DomainError(Exception):
    """Base exception for all domain errors."""

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class NotFoundError(DomainError):
    """Catalog entry or record not found."""

    code = "NOT_FOUND"


class ValidationError(DomainError):
    """Input validation failed."""

    code = "VALIDATION_ERROR"


class InvalidTimeError(ValidationError):
    """Clock time could not be parsed."""

    code = "INVALID_TIME"

    def __init__(self, value: Any, context: dict[str, Any] | None = None):
        ctx = context or {}
        ctx["value"] = value
        super().__init__(f"Invalid clock time: {value!r}", ctx)


class InvalidDateError(ValidationError):
    """Calendar date could not be parsed."""

    code = "INVALID_DATE"

    def __init__(self, value: Any, context: dict[str, Any] | None = None):
        ctx = context or {}
        ctx["value"] = value
        super().__init__(f"Invalid date: {value!r}", ctx)


class ConfigurationError(DomainError):
    """Planner misconfigured."""

    code = "CONFIGURATION_ERROR"


def degrade_on_error[**P, T](default: T) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Return a fallback value instead of raising for malformed input.

    Planner views feed live previews rather than a write path, so a domain
    or model validation failure inside a wrapped function is logged and
    replaced with a copy of ``default``. Anything else propagates.

    Usage:
        @degrade_on_error(default=[])
        def preview_time_blocks(start_time: str) -> list[GeneratedTimeBlock]:
            ...  # InvalidTimeError -> []

    Args:
        default: Value returned (deep-copied) when the wrapped call fails

    Returns:
        Decorator producing the wrapped function
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except DomainError as e:
                logger.warning(
                    "planner_input_rejected",
                    function=func.__name__,
                    code=e.code,
                    error=e.message,
                    context=e.context,
                )
            except pydantic.ValidationError as e:
                logger.warning(
                    "planner_input_rejected",
                    function=func.__name__,
                    code=ValidationError.code,
                    error=str(e),
                )
            return copy.deepcopy(default)

        return wrapper

    return decorator
