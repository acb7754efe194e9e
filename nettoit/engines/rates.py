"""Contribution and tariff tables.

Social-insurance caps and rates, flat deductions, child allowances,
income-tax tariff coefficients and surcharge parameters, keyed by year.
Never hardcode rates in computation functions: adding a year means adding a
table here, not changing the estimator.

Sources (estimate-grade values):
  - 2026: Sozialversicherungs-Rechengrößenverordnung 2026 (BBG),
    Section 32a EStG tariff as amended for 2026, SolZG 1995 Section 3/4
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from nettoit.exceptions import UnknownRateTableError
from nettoit.models.enums import FederalState, TaxClass


class IncomeTaxTariff(BaseModel):
    """Basic tariff (Grundtarif) zones per Section 32a EStG.

    Zone 1: up to ``basic_allowance`` -> 0
    Zone 2: y = (x - basic_allowance) / 10000; (zone2_a * y + zone2_b) * y
    Zone 3: z = (x - zone2_upper) / 10000; (zone3_a * z + zone3_b) * z + zone3_c
    Zone 4: zone4_rate * x - zone4_offset
    Zone 5: zone5_rate * x - zone5_offset
    """

    model_config = ConfigDict(frozen=True)

    basic_allowance: Decimal
    zone2_upper: Decimal
    zone2_a: Decimal
    zone2_b: Decimal
    zone3_upper: Decimal
    zone3_a: Decimal
    zone3_b: Decimal
    zone3_c: Decimal
    zone4_upper: Decimal
    zone4_rate: Decimal
    zone4_offset: Decimal
    zone5_rate: Decimal
    zone5_offset: Decimal


class SolidarityParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: Decimal
    threshold_single: Decimal
    threshold_splitting: Decimal
    taper_rate: Decimal  # Milderungszone


class RateTable(BaseModel):
    """Immutable rate set for one year."""

    model_config = ConfigDict(frozen=True)

    year: int

    # Contribution assessment ceilings (monthly)
    bbg_rv_av_monthly: Decimal
    bbg_kv_pv_monthly: Decimal

    # Total contribution rates, split 50/50 employer/employee
    rv_total: Decimal
    av_total: Decimal
    kv_general_total: Decimal
    kv_add_on_avg_total: Decimal
    pv_total: Decimal
    pv_childless_surcharge: Decimal  # employee only

    # Flat deductions (annual)
    employee_lump_sum: Decimal
    special_expenses_lump_sum: Decimal

    # Kinderfreibetrag incl. BEA allowance, per child (annual)
    child_allowance_per_child: Decimal

    # Entlastungsbetrag for single parents, tax class II (annual)
    single_parent_relief_first_child: Decimal
    single_parent_relief_additional_child: Decimal

    income_tax: IncomeTaxTariff
    soli: SolidarityParams

    # Simplified withholding multipliers, not ELStAM tables
    tax_class_multipliers: dict[TaxClass, Decimal]

    church_rate_standard: Decimal
    church_rate_reduced: Decimal
    church_reduced_states: frozenset[FederalState]

    def church_rate_for(self, state: FederalState) -> Decimal:
        if state in self.church_reduced_states:
            return self.church_rate_reduced
        return self.church_rate_standard


# ---------------------------------------------------------------------------
# 2026
# ---------------------------------------------------------------------------
RATES_2026 = RateTable(
    year=2026,
    bbg_rv_av_monthly=Decimal("8450.00"),
    bbg_kv_pv_monthly=Decimal("5812.50"),
    rv_total=Decimal("0.186"),
    av_total=Decimal("0.026"),
    kv_general_total=Decimal("0.146"),
    kv_add_on_avg_total=Decimal("0.029"),  # average Zusatzbeitrag
    pv_total=Decimal("0.036"),
    pv_childless_surcharge=Decimal("0.006"),
    employee_lump_sum=Decimal("1230"),
    special_expenses_lump_sum=Decimal("36"),
    child_allowance_per_child=Decimal("9756"),
    single_parent_relief_first_child=Decimal("4260"),
    single_parent_relief_additional_child=Decimal("240"),
    income_tax=IncomeTaxTariff(
        basic_allowance=Decimal("12348"),
        zone2_upper=Decimal("17799"),
        zone2_a=Decimal("914.51"),
        zone2_b=Decimal("1400"),
        zone3_upper=Decimal("69878"),
        zone3_a=Decimal("173.1"),
        zone3_b=Decimal("2397"),
        zone3_c=Decimal("1034.87"),
        zone4_upper=Decimal("277825"),
        zone4_rate=Decimal("0.42"),
        zone4_offset=Decimal("11135.63"),
        zone5_rate=Decimal("0.45"),
        zone5_offset=Decimal("19470.38"),
    ),
    soli=SolidarityParams(
        rate=Decimal("0.055"),
        threshold_single=Decimal("20350"),
        threshold_splitting=Decimal("40700"),
        taper_rate=Decimal("0.119"),
    ),
    tax_class_multipliers={
        TaxClass.V: Decimal("1.35"),
        TaxClass.VI: Decimal("1.5"),
    },
    church_rate_standard=Decimal("0.09"),
    church_rate_reduced=Decimal("0.08"),
    church_reduced_states=frozenset({FederalState.BY, FederalState.BW}),
)

RATE_TABLES: dict[int, RateTable] = {
    2026: RATES_2026,
}

DEFAULT_RATE_YEAR = 2026


def get_rate_table(year: int = DEFAULT_RATE_YEAR) -> RateTable:
    """Look up the rate table for *year*."""
    try:
        return RATE_TABLES[year]
    except KeyError:
        raise UnknownRateTableError(year, sorted(RATE_TABLES)) from None
