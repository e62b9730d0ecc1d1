"""Currency value object for representing monetary currencies."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from txaggregator.domain.shared.exceptions import ErrorCode, ValidationError

# Active ISO 4217 currency codes. Transactions keep their original currency,
# no conversion happens anywhere in the pipeline.
ISO_4217_CODES: frozenset[str] = frozenset(
    {
        "AED", "AFN", "ALL", "AMD", "ANG", "AOA", "ARS", "AUD", "AWG", "AZN",
        "BAM", "BBD", "BDT", "BGN", "BHD", "BIF", "BMD", "BND", "BOB", "BOV",
        "BRL", "BSD", "BTN", "BWP", "BYN", "BZD", "CAD", "CDF", "CHE", "CHF",
        "CHW", "CLF", "CLP", "CNY", "COP", "COU", "CRC", "CUC", "CUP", "CVE",
        "CZK", "DJF", "DKK", "DOP", "DZD", "EGP", "ERN", "ETB", "EUR", "FJD",
        "FKP", "GBP", "GEL", "GHS", "GIP", "GMD", "GNF", "GTQ", "GYD", "HKD",
        "HNL", "HTG", "HUF", "IDR", "ILS", "INR", "IQD", "IRR", "ISK", "JMD",
        "JOD", "JPY", "KES", "KGS", "KHR", "KMF", "KPW", "KRW", "KWD", "KYD",
        "KZT", "LAK", "LBP", "LKR", "LRD", "LSL", "LYD", "MAD", "MDL", "MGA",
        "MKD", "MMK", "MNT", "MOP", "MRU", "MUR", "MVR", "MWK", "MXN", "MXV",
        "MYR", "MZN", "NAD", "NGN", "NIO", "NOK", "NPR", "NZD", "OMR", "PAB",
        "PEN", "PGK", "PHP", "PKR", "PLN", "PYG", "QAR", "RON", "RSD", "RUB",
        "RWF", "SAR", "SBD", "SCR", "SDG", "SEK", "SGD", "SHP", "SLE", "SLL",
        "SOS", "SRD", "SSP", "STN", "SVC", "SYP", "SZL", "THB", "TJS", "TMT",
        "TND", "TOP", "TRY", "TTD", "TWD", "TZS", "UAH", "UGX", "USD", "USN",
        "UYI", "UYU", "UYW", "UZS", "VED", "VES", "VND", "VUV", "WST", "XAF",
        "XAG", "XAU", "XBA", "XBB", "XBC", "XBD", "XCD", "XDR", "XOF", "XPD",
        "XPF", "XPT", "XSU", "XTS", "XUA", "XXX", "YER", "ZAR", "ZMW", "ZWL",
    },
)


class Currency(BaseModel):
    """Value object representing an ISO 4217 currency."""

    code: str

    model_config = ConfigDict(
        frozen=True,  # Immutable
        str_strip_whitespace=True,  # Auto-strip whitespace
    )

    # overriding pydantic init to allow positional arguments Currency("EUR")
    def __init__(self, code: str | None = None, **data: Any):
        if "code" not in data:
            data["code"] = code
        super().__init__(**data)

    @field_validator("code", mode="before")
    @classmethod
    def validate_and_normalize_code(cls, v: Any) -> str:
        if v is None or len(str(v).strip()) == 0:
            raise ValidationError(
                "Currency code cannot be empty",
                code=ErrorCode.INVALID_CURRENCY,
            )

        normalized_code = str(v).strip().upper()
        if normalized_code not in ISO_4217_CODES:
            raise ValidationError(
                f"Invalid currency code: {v}",
                code=ErrorCode.INVALID_CURRENCY,
                details={"currency": str(v)},
            )

        return normalized_code

    @classmethod
    def is_known(cls, code: str | None) -> bool:
        return bool(code) and code.strip().upper() in ISO_4217_CODES

    def __str__(self) -> str:
        return self.code

    def __eq__(self, other) -> bool:
        if isinstance(other, Currency):
            return self.code == other.code
        if isinstance(other, str):
            return self.code == other.upper()
        return False

    def __hash__(self) -> int:
        return hash(self.code)
