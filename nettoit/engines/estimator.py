"""Net salary estimation engine.

Computes the monthly net pay of a German employee from gross pay using a
year-keyed rate table. Implements:
  - Employee shares of pension, unemployment, health and care insurance,
    capped at the contribution assessment ceilings (BBG)
  - Childless care surcharge (age 23+ assumed, age is not collected)
  - Taxable income (zvE) estimate with lump sums, child allowances and
    single-parent relief (tax class II)
  - Basic income-tax tariff per Section 32a EStG, splitting for class III,
    simplified multipliers for classes V and VI
  - Solidarity surcharge with taper zone, church tax by federal state
  - Optional private health premium deducted from net

Pure: the result depends only on the input record, the rate table and the
options. Every amount is a Decimal; taxes are floored to whole euros.
"""

import logging
from collections.abc import Mapping
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict

from nettoit.engines.rates import RATES_2026, RateTable
from nettoit.formatting import format_eur, format_percent
from nettoit.i18n import translate
from nettoit.models.enums import FederalState, Language, TaxClass
from nettoit.models.inputs import EstimateInput
from nettoit.models.results import EstimateResult, SocialContributions, TaxBreakdown

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
TWO = Decimal("2")
TAX_SCALE = Decimal("10000")
FLOOR_EPSILON = Decimal("1e-9")


def floor_euro(amount: Decimal) -> Decimal:
    """Floor to whole euros, nudged by 1e-9 so 41.9999999999 lands on 42."""
    return (amount + FLOOR_EPSILON).to_integral_value(rounding=ROUND_FLOOR)


class EstimatorOptions(BaseModel):
    """Feature switches, independent of the input record and the rate table."""

    model_config = ConfigDict(frozen=True)

    private_premium: bool = True
    language: Language = Language.EN


class NetSalaryEstimator:
    """Estimates social contributions, taxes and net pay."""

    def __init__(
        self,
        rates: RateTable = RATES_2026,
        options: EstimatorOptions | None = None,
    ) -> None:
        self.rates = rates
        self.options = options or EstimatorOptions()

    def estimate(self, data: EstimateInput | Mapping[str, Any]) -> EstimateResult:
        """Compute the full gross-to-net breakdown.

        *data* may be a raw mapping (camelCase or snake_case keys); it is
        coerced into an ``EstimateInput`` first, so this never fails on bad
        values.
        """
        if not isinstance(data, EstimateInput):
            data = EstimateInput.model_validate(dict(data))

        # --- Normalization ---
        gross_monthly = data.gross_monthly
        gross_annual = gross_monthly * 12
        children_count = self.children_count(data.child_allowance)
        pkv_premium = (
            data.pkv_premium_monthly
            if data.is_private and self.options.private_premium
            else ZERO
        )

        # --- Social contributions (monthly, employee share) ---
        social = self.compute_social_contributions(
            gross_monthly, data.is_private, children_count, pkv_premium
        )
        social_annual = social.total_annual

        # --- zvE ---
        taxable = self.compute_taxable_income(
            gross_annual,
            social_annual,
            data.child_allowance,
            children_count,
            data.tax_class,
        )

        # --- Taxes ---
        income_tax = self.compute_income_tax(taxable, data.tax_class)
        soli = self.compute_solidarity_surcharge(
            income_tax, splitting=data.tax_class == TaxClass.III
        )
        church_rate = self.rates.church_rate_for(data.state) if data.church_tax else ZERO
        church = self.compute_church_tax(income_tax, data.state) if data.church_tax else ZERO
        taxes_annual = income_tax + soli + church

        # --- Net ---
        net_annual = max(
            gross_annual - social_annual - taxes_annual - pkv_premium * 12, ZERO
        )
        net_monthly = net_annual / 12

        logger.debug(
            "estimate gross=%s class=%s zvE=%s income_tax=%s soli=%s church=%s net=%s",
            gross_monthly, data.tax_class, taxable, income_tax, soli, church, net_monthly,
        )

        return EstimateResult(
            rate_year=self.rates.year,
            gross_monthly=gross_monthly,
            gross_annual=gross_annual,
            taxable_income_annual=taxable,
            children_count=children_count,
            church_rate=church_rate,
            social=social,
            taxes=TaxBreakdown(
                income_tax_annual=income_tax,
                soli_annual=soli,
                church_annual=church,
                total_annual=taxes_annual,
            ),
            net_monthly=net_monthly,
            net_annual=net_annual,
            pkv_premium_monthly=pkv_premium,
        )

    # ------------------------------------------------------------------
    # Social insurance
    # ------------------------------------------------------------------

    @staticmethod
    def children_count(child_allowance: Decimal) -> int:
        """Whole children implied by the allowance; 0.5 still counts as one."""
        if child_allowance <= ZERO:
            return 0
        return int(child_allowance.to_integral_value(rounding=ROUND_CEILING))

    def compute_social_contributions(
        self,
        gross_monthly: Decimal,
        private_health: bool,
        children_count: int,
        pkv_premium_monthly: Decimal = ZERO,
    ) -> SocialContributions:
        r = self.rates
        rv_av_base = min(gross_monthly, r.bbg_rv_av_monthly)
        kv_pv_base = min(gross_monthly, r.bbg_kv_pv_monthly)

        rv = rv_av_base * (r.rv_total / TWO)
        av = rv_av_base * (r.av_total / TWO)

        if private_health:
            kv = ZERO
            pv = ZERO
        else:
            kv = kv_pv_base * ((r.kv_general_total + r.kv_add_on_avg_total) / TWO)
            pv = kv_pv_base * (r.pv_total / TWO)
            if children_count == 0:
                pv += kv_pv_base * r.pv_childless_surcharge

        return SocialContributions(
            rv=rv,
            av=av,
            kv=kv,
            pv=pv,
            total=rv + av + kv + pv,
            note=self._social_note(private_health, children_count, pkv_premium_monthly),
        )

    def _social_note(
        self, private_health: bool, children_count: int, pkv_premium_monthly: Decimal
    ) -> str:
        lang = self.options.language
        if private_health:
            if self.options.private_premium:
                return translate(
                    "note.private_premium", lang, premium=format_eur(pkv_premium_monthly)
                )
            return translate("note.private_excluded", lang)
        if children_count == 0:
            rate = format_percent(self.rates.pv_childless_surcharge, lang)
            return translate("note.childless", lang, rate=rate)
        return translate("note.children", lang)

    # ------------------------------------------------------------------
    # Taxable income
    # ------------------------------------------------------------------

    def compute_taxable_income(
        self,
        gross_annual: Decimal,
        social_annual: Decimal,
        child_allowance: Decimal,
        children_count: int,
        tax_class: TaxClass,
    ) -> Decimal:
        """Estimate zvE; never negative."""
        r = self.rates
        zve = gross_annual - social_annual
        zve -= r.employee_lump_sum
        zve -= r.special_expenses_lump_sum
        # Fractional allowances scale linearly
        zve -= child_allowance * r.child_allowance_per_child

        if tax_class == TaxClass.II:
            zve -= (
                r.single_parent_relief_first_child
                + max(children_count - 1, 0) * r.single_parent_relief_additional_child
            )

        return max(zve, ZERO)

    # ------------------------------------------------------------------
    # Income tax
    # ------------------------------------------------------------------

    def compute_basic_tariff(self, taxable_income: Decimal) -> Decimal:
        """Income tax of the basic tariff (Grundtarif) on whole euros."""
        t = self.rates.income_tax
        x = max(ZERO, floor_euro(taxable_income))

        if x <= t.basic_allowance:
            return ZERO
        if x <= t.zone2_upper:
            y = (x - t.basic_allowance) / TAX_SCALE
            return floor_euro((t.zone2_a * y + t.zone2_b) * y)
        if x <= t.zone3_upper:
            z = (x - t.zone2_upper) / TAX_SCALE
            return floor_euro((t.zone3_a * z + t.zone3_b) * z + t.zone3_c)
        if x <= t.zone4_upper:
            return floor_euro(t.zone4_rate * x - t.zone4_offset)
        return floor_euro(t.zone5_rate * x - t.zone5_offset)

    def compute_income_tax(self, taxable_income: Decimal, tax_class: TaxClass) -> Decimal:
        """Annual income tax with the tax-class adjustment applied once."""
        if tax_class == TaxClass.III:
            half = max(ZERO, floor_euro(taxable_income / TWO))
            return floor_euro(self.compute_basic_tariff(half) * TWO)

        base = self.compute_basic_tariff(taxable_income)
        multiplier = self.rates.tax_class_multipliers.get(tax_class)
        if multiplier is None:
            return base
        return floor_euro(base * multiplier)

    # ------------------------------------------------------------------
    # Surcharges
    # ------------------------------------------------------------------

    def compute_solidarity_surcharge(self, income_tax: Decimal, splitting: bool = False) -> Decimal:
        s = self.rates.soli
        tax = max(ZERO, floor_euro(income_tax))
        threshold = s.threshold_splitting if splitting else s.threshold_single
        if tax <= threshold:
            return ZERO
        full = s.rate * tax
        tapered = s.taper_rate * (tax - threshold)
        return floor_euro(min(full, tapered))

    def compute_church_tax(self, income_tax: Decimal, state: FederalState) -> Decimal:
        return floor_euro(income_tax * self.rates.church_rate_for(state))


def estimate(
    data: EstimateInput | Mapping[str, Any],
    rates: RateTable = RATES_2026,
    options: EstimatorOptions | None = None,
) -> EstimateResult:
    """Functional entry point: ``estimate(input, rates) -> result``."""
    return NetSalaryEstimator(rates, options).estimate(data)
