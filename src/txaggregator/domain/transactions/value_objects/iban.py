"""IBAN value object (ISO 13616)."""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from txaggregator.domain.shared.exceptions import ErrorCode, ValidationError

IBAN_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{1,30}$")
MIN_LENGTH = 15
MAX_LENGTH = 34


def normalize_iban(value: str | None) -> str | None:
    """Normalize an IBAN for stable comparisons/storage.

    - Removes all whitespace
    - Uppercases

    Returns None if value is None.
    """
    if value is None:
        return None
    return re.sub(r"\s+", "", value).upper()


def _mod97(digits: str) -> int:
    remainder = 0
    for digit in digits:
        remainder = (remainder * 10 + int(digit)) % 97
    return remainder


def has_valid_checksum(iban: str) -> bool:
    """Check the ISO 7064 mod-97 checksum of a structurally valid IBAN."""
    rearranged = iban[4:] + iban[:4]
    # A-Z map to 10-35
    numeric = "".join(str(int(char, 36)) for char in rearranged)
    return _mod97(numeric) == 1


def _invalid(message: str, iban: str | None) -> ValidationError:
    return ValidationError(
        message,
        code=ErrorCode.INVALID_IBAN,
        details={"iban": iban},
    )


class Iban(BaseModel):
    """Value object representing an International Bank Account Number.

    The constructor is the only validation point: an ``Iban`` instance is
    always normalized and carries a correct mod-97 checksum.
    """

    value: str

    model_config = ConfigDict(frozen=True)

    # allow positional construction Iban("DE89...")
    def __init__(self, value: str | None = None, **data: Any):
        if "value" not in data:
            data["value"] = value
        super().__init__(**data)

    @field_validator("value", mode="before")
    @classmethod
    def validate_and_normalize(cls, v: Any) -> str:
        iban = normalize_iban(v) if isinstance(v, str) else v

        if not iban:
            raise _invalid("IBAN cannot be null or blank", iban)

        if len(iban) < MIN_LENGTH or len(iban) > MAX_LENGTH:
            msg = (
                f"IBAN must be between {MIN_LENGTH} and {MAX_LENGTH} "
                f"characters: {iban}"
            )
            raise _invalid(msg, iban)

        if not IBAN_PATTERN.match(iban):
            raise _invalid(f"Invalid IBAN format: {iban}", iban)

        if not has_valid_checksum(iban):
            raise _invalid(f"Invalid IBAN checksum: {iban}", iban)

        return iban

    @classmethod
    def is_valid(cls, value: str | None) -> bool:
        return cls.try_parse(value) is not None

    @classmethod
    def try_parse(cls, value: str | None) -> Optional[Iban]:
        try:
            return cls(value)
        except ValidationError:
            return None

    @property
    def country_code(self) -> str:
        return self.value[:2]

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.value
