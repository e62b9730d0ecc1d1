"""Shared domain building blocks."""

from txaggregator.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from txaggregator.domain.shared.time import (
    as_utc,
    today_utc,
    utc_now,
    years_before,
)

__all__ = [
    "BusinessRuleViolation",
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "ValidationError",
    "as_utc",
    "today_utc",
    "utc_now",
    "years_before",
]
