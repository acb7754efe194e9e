"""Data models for Netto-It."""

from nettoit.models.enums import (
    FEDERAL_STATE_NAMES,
    FederalState,
    HealthType,
    Language,
    TaxClass,
)
from nettoit.models.inputs import EstimateInput
from nettoit.models.results import EstimateResult, SocialContributions, TaxBreakdown

__all__ = [
    "EstimateInput",
    "EstimateResult",
    "FEDERAL_STATE_NAMES",
    "FederalState",
    "HealthType",
    "Language",
    "SocialContributions",
    "TaxBreakdown",
    "TaxClass",
]
