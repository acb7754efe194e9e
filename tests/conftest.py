"""Shared test fixtures for Netto-It."""

from decimal import Decimal
from pathlib import Path

import pytest

from nettoit.engines.estimator import NetSalaryEstimator
from nettoit.models.enums import FederalState, HealthType, TaxClass
from nettoit.models.inputs import EstimateInput
from nettoit.storage.documents import InputStore
from nettoit.storage.memory import InMemoryStorage


@pytest.fixture
def engine() -> NetSalaryEstimator:
    return NetSalaryEstimator()


@pytest.fixture
def single_public() -> EstimateInput:
    """3000 EUR/month, class I, Bavaria, public health, no children."""
    return EstimateInput(
        gross_monthly=Decimal("3000"),
        tax_class=TaxClass.I,
        church_tax=False,
        child_allowance=Decimal("0"),
        state=FederalState.BY,
        health_type=HealthType.PUBLIC,
    )


@pytest.fixture
def single_private(single_public: EstimateInput) -> EstimateInput:
    return single_public.model_copy(
        update={
            "health_type": HealthType.PRIVATE,
            "pkv_premium_monthly": Decimal("200"),
        }
    )


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(memory_storage: InMemoryStorage) -> InputStore:
    return InputStore(memory_storage)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "nettoit_test.db"
