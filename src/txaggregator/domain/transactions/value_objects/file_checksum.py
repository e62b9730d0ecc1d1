"""Content-addressing checksum of an uploaded file."""

from __future__ import annotations

import hashlib
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from txaggregator.domain.shared.exceptions import ErrorCode, ValidationError

HEX_LENGTH = 64
_HEX_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def _sha256_hash(content: bytes) -> str:
    """Compute SHA-256 hash of raw bytes, returning hex digest."""
    return hashlib.sha256(content).hexdigest()


class FileChecksum(BaseModel):
    """SHA-256 digest of raw file bytes, used as the deduplication key.

    Only the bytes take part in the digest; the filename never does, so two
    uploads of identical content always share a checksum.
    """

    value: str

    model_config = ConfigDict(frozen=True)

    def __init__(self, value: str | None = None, **data: Any):
        if "value" not in data:
            data["value"] = value
        super().__init__(**data)

    @field_validator("value", mode="before")
    @classmethod
    def validate_value(cls, v: Any) -> str:
        if v is None or not str(v).strip():
            raise ValidationError(
                "Checksum cannot be null or blank",
                code=ErrorCode.INVALID_CHECKSUM,
            )
        v = str(v)
        if len(v) != HEX_LENGTH:
            raise ValidationError(
                f"Invalid checksum length: {len(v)}",
                code=ErrorCode.INVALID_CHECKSUM,
            )
        if not _HEX_PATTERN.match(v):
            raise ValidationError(
                "Checksum must be lowercase hexadecimal",
                code=ErrorCode.INVALID_CHECKSUM,
            )
        return v

    @classmethod
    def of(cls, content: bytes | None) -> FileChecksum:
        if not content:
            raise ValidationError(
                "Content cannot be null or empty",
                code=ErrorCode.INVALID_INPUT,
            )
        return cls(_sha256_hash(bytes(content)))

    @classmethod
    def of_text(cls, content: str | None) -> FileChecksum:
        if not content:
            raise ValidationError(
                "Content cannot be null or empty",
                code=ErrorCode.INVALID_INPUT,
            )
        return cls.of(content.encode("utf-8"))

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.value
