"""Net salary computation engines."""

from nettoit.engines.estimator import (
    EstimatorOptions,
    NetSalaryEstimator,
    estimate,
    floor_euro,
)
from nettoit.engines.rates import RATE_TABLES, RATES_2026, RateTable, get_rate_table

__all__ = [
    "EstimatorOptions",
    "NetSalaryEstimator",
    "RATE_TABLES",
    "RATES_2026",
    "RateTable",
    "estimate",
    "floor_euro",
    "get_rate_table",
]
