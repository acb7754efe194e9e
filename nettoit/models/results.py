"""Estimator output models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class SocialContributions(BaseModel):
    """Monthly employee shares of the statutory insurance branches."""

    model_config = ConfigDict(frozen=True)

    rv: Decimal  # pension
    av: Decimal  # unemployment
    kv: Decimal  # health
    pv: Decimal  # long-term care
    total: Decimal
    note: str

    @property
    def total_annual(self) -> Decimal:
        return self.total * 12


class TaxBreakdown(BaseModel):
    """Annual taxes, each floored to whole euros."""

    model_config = ConfigDict(frozen=True)

    income_tax_annual: Decimal
    soli_annual: Decimal
    church_annual: Decimal
    total_annual: Decimal


class EstimateResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate_year: int
    gross_monthly: Decimal
    gross_annual: Decimal
    taxable_income_annual: Decimal
    children_count: int
    church_rate: Decimal
    social: SocialContributions
    taxes: TaxBreakdown
    net_monthly: Decimal
    net_annual: Decimal
    pkv_premium_monthly: Decimal
