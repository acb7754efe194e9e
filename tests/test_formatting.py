"""Tests for display formatting and the message catalog."""

from decimal import Decimal

import pytest

from nettoit.formatting import format_eur, format_percent
from nettoit.i18n import MESSAGES, translate
from nettoit.models.enums import Language


class TestFormatEur:
    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("0"), "0,00 €"),
            (Decimal("2067.5"), "2.067,50 €"),
            (Decimal("1234567.891"), "1.234.567,89 €"),
            (Decimal("0.005"), "0,01 €"),
            (Decimal("-42.1"), "-42,10 €"),
            (3000, "3.000,00 €"),
            (12.5, "12,50 €"),
        ],
    )
    def test_format(self, amount, expected):
        assert format_eur(amount) == expected

    def test_non_finite_shows_zero(self):
        assert format_eur(Decimal("NaN")) == "0,00 €"


class TestFormatPercent:
    def test_english(self):
        assert format_percent(Decimal("0.006")) == "0.6%"
        assert format_percent(Decimal("0.09")) == "9%"

    def test_german(self):
        assert format_percent(Decimal("0.006"), Language.DE) == "0,6 %"
        assert format_percent(Decimal("0.08"), Language.DE) == "8 %"


class TestTranslate:
    def test_placeholders(self):
        assert translate("report.church_rate", rate="9%") == "Rate: 9%"

    def test_storage_key_placeholder(self):
        assert (
            translate("report.storage_key", storage_key="toolstack.nettoit.v1")
            == "Storage key: toolstack.nettoit.v1"
        )
        assert translate(
            "report.storage_key", Language.DE, storage_key="toolstack.nettoit.v1"
        ).endswith("toolstack.nettoit.v1")

    def test_key_is_a_valid_placeholder_name(self):
        assert translate("report.church_rate", rate="8%", key="ignored") == "Rate: 8%"

    def test_german(self):
        assert translate("report.income_tax", Language.DE) == "Lohnsteuer"

    def test_missing_german_key_falls_back_to_english(self):
        assert translate("report.brand", Language.DE) == "TOOLSTACK"

    def test_unknown_key_raises(self):
        with pytest.raises(KeyError):
            translate("report.nope")

    def test_german_catalog_is_subset_of_english(self):
        assert set(MESSAGES[Language.DE]) <= set(MESSAGES[Language.EN])
