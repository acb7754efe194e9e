"""Tests for the interactive wizard CLI command."""

import io
from decimal import Decimal, InvalidOperation
from unittest.mock import patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from nettoit.cli import app
from nettoit.models.enums import FederalState, HealthType, TaxClass
from nettoit.storage import InputStore, SQLiteStorage, create_schema
from nettoit.wizard import _parse_amount, _prompt_decimal

runner = CliRunner()


def _stored(db_path):
    conn = create_schema(db_path)
    try:
        return InputStore(SQLiteStorage(conn)).load()
    finally:
        conn.close()


# ---------------------------------------------------------------------------
# Unit tests for helpers
# ---------------------------------------------------------------------------


class TestParseAmount:
    def test_dot(self):
        assert _parse_amount("3700.50") == Decimal("3700.50")

    def test_comma(self):
        assert _parse_amount(" 2500,5 ") == Decimal("2500.5")

    @pytest.mark.parametrize("raw", ["abc", "", "inf", "NaN"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidOperation):
            _parse_amount(raw)


class TestPromptDecimal:
    def test_retries_until_valid(self):
        out = io.StringIO()
        console = Console(file=out, width=100)
        with patch("nettoit.wizard.Prompt.ask", side_effect=["abc", "-1", "2500,5"]):
            value = _prompt_decimal("Gross", Decimal("0"), console, Decimal("1000000"))
        assert value == Decimal("2500.5")
        assert "Invalid number" in out.getvalue()
        assert "between 0 and 1000000" in out.getvalue()

    def test_upper_bound(self):
        console = Console(file=io.StringIO())
        with patch("nettoit.wizard.Prompt.ask", side_effect=["11", "10"]):
            assert _prompt_decimal("Children", Decimal("0"), console, Decimal("10")) == Decimal("10")


# ---------------------------------------------------------------------------
# Integration tests — full wizard flow via CliRunner
# ---------------------------------------------------------------------------


class TestWizardCommand:
    def test_wizard_help(self):
        result = runner.invoke(app, ["wizard", "--help"])
        assert result.exit_code == 0
        assert "interactive" in result.output.lower()

    def test_public_flow(self, db_path):
        inputs = "\n".join([
            "3000",    # gross
            "I",       # tax class
            "n",       # church tax
            "0",       # children allowance
            "BY",      # state
            "public",  # health
            "n",       # no report
        ]) + "\n"
        result = runner.invoke(app, ["wizard", "--db", str(db_path)], input=inputs)
        assert result.exit_code == 0, result.output
        assert "Step 1: Salary" in result.output
        assert "Step 4: Estimate" in result.output
        assert "2.067,50 €" in result.output
        assert "Wizard complete!" in result.output
        assert _stored(db_path).gross_monthly == Decimal("3000")

    def test_saved_values_become_defaults(self, db_path):
        runner.invoke(app, ["estimate", "-g", "4100", "-k", "III", "-s", "HH", "--db", str(db_path)])
        # Accept every default, decline the report
        result = runner.invoke(app, ["wizard", "--db", str(db_path)], input="\n" * 6 + "n\n")
        assert result.exit_code == 0, result.output
        data = _stored(db_path)
        assert data.gross_monthly == Decimal("4100")
        assert data.tax_class == TaxClass.III
        assert data.state == FederalState.HH

    def test_private_flow_asks_premium(self, db_path):
        inputs = "\n".join(["3000", "I", "n", "0", "BE", "private", "200", "n"]) + "\n"
        result = runner.invoke(app, ["wizard", "--db", str(db_path)], input=inputs)
        assert result.exit_code == 0, result.output
        assert "Private premium per month" in result.output
        data = _stored(db_path)
        assert data.health_type == HealthType.PRIVATE
        assert data.pkv_premium_monthly == Decimal("200")

    def test_invalid_amount_reprompts(self, db_path):
        inputs = "\n".join(["lots", "3000", "I", "n", "0", "BY", "public", "n"]) + "\n"
        result = runner.invoke(app, ["wizard", "--db", str(db_path)], input=inputs)
        assert result.exit_code == 0, result.output
        assert "Invalid number" in result.output

    def test_writes_report(self, db_path, tmp_path):
        out = tmp_path / "wizard_report.txt"
        inputs = "\n".join(["3000", "I", "y", "0", "BY", "public", "y", "txt", str(out)]) + "\n"
        result = runner.invoke(app, ["wizard", "--db", str(db_path)], input=inputs)
        assert result.exit_code == 0, result.output
        assert out.exists()
        assert "Rate: 8%" in out.read_text(encoding="utf-8")

    def test_german(self, db_path):
        inputs = "\n".join(["3000", "I", "n", "0", "BY", "public", "n"]) + "\n"
        result = runner.invoke(app, ["wizard", "-l", "de", "--db", str(db_path)], input=inputs)
        assert result.exit_code == 0, result.output
        assert "Lohnsteuer" in result.output

    def test_report_write_failure_is_reported(self, db_path, tmp_path):
        inputs = "\n".join(["3000", "I", "n", "0", "BY", "public", "y", "txt", str(tmp_path)]) + "\n"
        result = runner.invoke(app, ["wizard", "--db", str(db_path)], input=inputs)
        assert result.exit_code == 0, result.output
        assert "Could not write report" in result.output
        assert _stored(db_path).gross_monthly == Decimal("3000")

    def test_directory_as_db(self, tmp_path):
        result = runner.invoke(app, ["wizard", "--db", str(tmp_path)], input="\n")
        assert result.exit_code == 1
        assert "Error: Storage error" in result.output
