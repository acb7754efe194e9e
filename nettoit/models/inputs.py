"""Estimator input record.

Every field is coerced independently: numbers may arrive as strings with
either ``.`` or ``,`` as decimal separator, unparseable values fall back to 0,
and unknown enum values fall back to the first-class default. Construction
never raises for bad values.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from nettoit.models.enums import FederalState, HealthType, TaxClass

ZERO = Decimal("0")
MAX_GROSS_MONTHLY = Decimal("1000000")
MAX_CHILD_ALLOWANCE = Decimal("10")
MAX_PKV_PREMIUM_MONTHLY = Decimal("10000")

_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
TRUTHY_STRINGS = frozenset({"true", "1", "yes", "on", "ja"})
FALSY_STRINGS = frozenset({"false", "0", "no", "off", "nein", ""})


def parse_decimal(value: Any, fallback: Decimal = ZERO) -> Decimal:
    """Parse a user-entered number, accepting ``,`` as decimal separator.

    Like a lenient form field: a leading numeric prefix is used
    (``"3700 EUR"`` -> 3700), anything else yields *fallback*.
    """
    if isinstance(value, bool) or value is None:
        return fallback
    if isinstance(value, Decimal):
        return value if value.is_finite() else fallback
    if isinstance(value, (int, float)):
        try:
            parsed = Decimal(str(value))
        except InvalidOperation:
            return fallback
        return parsed if parsed.is_finite() else fallback

    match = _NUMBER_PREFIX.match(str(value).replace(",", ".", 1))
    if match is None:
        return fallback
    try:
        parsed = Decimal(match.group(1))
    except InvalidOperation:
        return fallback
    return parsed if parsed.is_finite() else fallback


def clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    return min(high, max(low, value))


def parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return bool(value)


def parse_tax_class(value: Any, fallback: TaxClass = TaxClass.I) -> TaxClass:
    key = str(value or "").strip().upper()
    return TaxClass(key) if key in TaxClass.__members__ else fallback


def parse_state(value: Any, fallback: FederalState = FederalState.BY) -> FederalState:
    key = str(value or "").strip().upper()
    return FederalState(key) if key in FederalState.__members__ else fallback


def parse_health_type(value: Any) -> HealthType:
    if str(value or "").strip().lower() == HealthType.PRIVATE.value:
        return HealthType.PRIVATE
    return HealthType.PUBLIC


class EstimateInput(BaseModel):
    """Raw form record fed to the estimator.

    Serialized with camelCase keys (``grossMonthly``, ``taxClass``, ...),
    which is the shape stored in autosave and export documents.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    gross_monthly: Decimal = Field(
        default=ZERO,
        description="Gross monthly salary in EUR, clamped to [0, 1,000,000]",
    )
    tax_class: TaxClass = TaxClass.I
    church_tax: bool = False
    child_allowance: Decimal = Field(
        default=ZERO,
        description="Kinderfreibetrag count, clamped to [0, 10]; 0.5 steps are common",
    )
    state: FederalState = FederalState.BY
    health_type: HealthType = HealthType.PUBLIC
    pkv_premium_monthly: Decimal = Field(
        default=ZERO,
        description="Private health premium in EUR per month, clamped to [0, 10,000]",
    )

    @field_validator("gross_monthly", mode="before")
    @classmethod
    def _coerce_gross_monthly(cls, value: Any) -> Decimal:
        return clamp(parse_decimal(value), ZERO, MAX_GROSS_MONTHLY)

    @field_validator("child_allowance", mode="before")
    @classmethod
    def _coerce_child_allowance(cls, value: Any) -> Decimal:
        return clamp(parse_decimal(value), ZERO, MAX_CHILD_ALLOWANCE)

    @field_validator("pkv_premium_monthly", mode="before")
    @classmethod
    def _coerce_pkv_premium(cls, value: Any) -> Decimal:
        return clamp(parse_decimal(value), ZERO, MAX_PKV_PREMIUM_MONTHLY)

    @field_validator("tax_class", mode="before")
    @classmethod
    def _coerce_tax_class(cls, value: Any) -> TaxClass:
        return parse_tax_class(value)

    @field_validator("church_tax", mode="before")
    @classmethod
    def _coerce_church_tax(cls, value: Any) -> bool:
        return parse_bool(value)

    @field_validator("state", mode="before")
    @classmethod
    def _coerce_state(cls, value: Any) -> FederalState:
        return parse_state(value)

    @field_validator("health_type", mode="before")
    @classmethod
    def _coerce_health_type(cls, value: Any) -> HealthType:
        return parse_health_type(value)

    @property
    def is_private(self) -> bool:
        return self.health_type == HealthType.PRIVATE

    def to_record(self) -> dict[str, Any]:
        """camelCase dict of the record, values kept as Python types."""
        return self.model_dump(by_alias=True)
