"""Typer CLI interface for Netto-It."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from functools import partial
from pathlib import Path

import typer

from nettoit.config import DB_ENVVAR, DEFAULT_DB_PATH
from nettoit.exceptions import NettoItError
from nettoit.models.enums import FederalState, HealthType, Language, TaxClass

BANNER = r"""
   _   _      _   _              ___ _
  | \ | | ___| |_| |_ ___       |_ _| |_
  |  \| |/ _ \ __| __/ _ \ _____ | || __|
  | |\  |  __/ |_| || (_) |_____|| || |_
  |_| \_|\___|\__|\__\___/      |___|\__|

  Netto-It
  "Brutto rein, Netto raus."
"""


def show_banner() -> None:
    typer.echo(BANNER)


app = typer.Typer(
    name="nettoit",
    help="Netto-It — German net salary estimate (gross to net) with a simple breakdown.",
)

DbOption = typer.Option(
    DEFAULT_DB_PATH,
    "--db",
    envvar=DB_ENVVAR,
    help="Path to the SQLite file holding the autosaved input",
)
LanguageOption = typer.Option("en", "--language", "-l", help="Output language: en, de")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Netto-It — German net salary estimate (gross to net)."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
    if ctx.invoked_subcommand is None:
        show_banner()
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@contextmanager
def _fail_on_error() -> Iterator[None]:
    """Report storage and file errors as `Error: ...` and exit 1."""
    try:
        yield
    except (NettoItError, OSError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)


def _open_store(db: Path) -> tuple["InputStore", sqlite3.Connection]:  # noqa: F821
    from nettoit.storage import InputStore, SQLiteStorage, create_schema

    db.parent.mkdir(parents=True, exist_ok=True)
    conn = create_schema(db)
    return InputStore(SQLiteStorage(conn)), conn


def _parse_choice(value: str, enum_cls: type, label: str, upper: bool = True):
    key = value.strip().upper() if upper else value.strip().lower()
    valid = [m.value for m in enum_cls]
    if key not in valid:
        typer.echo(f"Error: Invalid {label} '{value}'. Valid: {', '.join(valid)}", err=True)
        raise typer.Exit(1)
    return enum_cls(key)


def _parse_language(value: str) -> Language:
    return _parse_choice(value, Language, "language", upper=False)


def _print_estimate(data: "EstimateInput", result: "EstimateResult", language: Language) -> None:  # noqa: F821
    from nettoit.formatting import format_eur, format_percent
    from nettoit.i18n import translate
    from nettoit.models.enums import FEDERAL_STATE_NAMES

    t = partial(translate, language=language)

    def line(label: str, value: str) -> None:
        typer.echo(f"  {label + ':':<34}{value:>16}")

    typer.echo("")
    typer.echo(f"=== {t('report.title')} ({result.rate_year}) ===")
    typer.echo("")
    typer.echo(t("report.inputs").upper())
    line(t("report.gross_monthly"), format_eur(result.gross_monthly))
    line(t("report.tax_class"), data.tax_class.value)
    line(t("report.state"), FEDERAL_STATE_NAMES[data.state])
    line(t("report.church_tax"), t("report.yes") if data.church_tax else t("report.no"))
    line(t("report.child_allowance"), str(data.child_allowance))
    line(
        t("report.health"),
        t("report.health_private") if data.is_private else t("report.health_public"),
    )
    if result.pkv_premium_monthly > 0:
        line(t("report.pkv_premium"), format_eur(result.pkv_premium_monthly))
    typer.echo("")
    typer.echo(t("report.social_breakdown").upper())
    line(t("report.pension"), format_eur(result.social.rv))
    line(t("report.unemployment"), format_eur(result.social.av))
    line(t("report.health_insurance"), format_eur(result.social.kv))
    line(t("report.care"), format_eur(result.social.pv))
    typer.echo("  ──────────────────────────────────────────────────")
    line(t("report.social_annual"), format_eur(result.social.total_annual))
    typer.echo(f"  {result.social.note}")
    typer.echo("")
    typer.echo(t("report.taxes_breakdown").upper())
    line(t("report.taxable_income"), format_eur(result.taxable_income_annual))
    line(t("report.income_tax"), format_eur(result.taxes.income_tax_annual))
    line(t("report.soli"), format_eur(result.taxes.soli_annual))
    line(t("report.church"), format_eur(result.taxes.church_annual))
    if data.church_tax:
        typer.echo(f"    {t('report.church_rate', rate=format_percent(result.church_rate, language))}")
    typer.echo("  ──────────────────────────────────────────────────")
    line(t("report.taxes_annual"), format_eur(result.taxes.total_annual))
    typer.echo("")
    typer.echo(t("report.summary").upper())
    line(t("report.gross_annual"), format_eur(result.gross_annual))
    if result.pkv_premium_monthly > 0:
        line(t("report.pkv_annual"), format_eur(result.pkv_premium_monthly * 12))
    line(t("report.net_annual"), format_eur(result.net_annual))
    typer.echo("  ══════════════════════════════════════════════════")
    line(t("report.net_monthly").upper(), format_eur(result.net_monthly))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def estimate(
    gross: str | None = typer.Option(
        None, "--gross", "-g", help="Gross monthly salary in EUR (comma or dot decimals)"
    ),
    tax_class: str | None = typer.Option(
        None, "--tax-class", "-k", help="Tax class: I, II, III, IV, V, VI"
    ),
    church_tax: bool | None = typer.Option(
        None, "--church-tax/--no-church-tax", help="Whether church tax applies"
    ),
    children: str | None = typer.Option(
        None, "--children", "-c", help="Children allowance (0-10, halves allowed)"
    ),
    state: str | None = typer.Option(
        None, "--state", "-s", help="Federal state code, e.g. BY, BE, NW"
    ),
    health: str | None = typer.Option(
        None, "--health", help="Health insurance: public or private"
    ),
    pkv_premium: str | None = typer.Option(
        None, "--pkv-premium", help="Private health premium per month (private only)"
    ),
    exclude_pkv_premium: bool = typer.Option(
        False,
        "--exclude-pkv-premium",
        help="Do not deduct the private premium from net",
    ),
    language: str = LanguageOption,
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    save: bool = typer.Option(True, "--save/--no-save", help="Autosave the input"),
    db: Path = DbOption,
) -> None:
    """Estimate net salary. Unset options keep the autosaved values."""
    from nettoit.engines.estimator import EstimatorOptions, NetSalaryEstimator
    from nettoit.models.inputs import EstimateInput

    lang = _parse_language(language)
    updates: dict[str, object] = {}
    if gross is not None:
        updates["gross_monthly"] = gross
    if tax_class is not None:
        updates["tax_class"] = _parse_choice(tax_class, TaxClass, "tax class")
    if church_tax is not None:
        updates["church_tax"] = church_tax
    if children is not None:
        updates["child_allowance"] = children
    if state is not None:
        updates["state"] = _parse_choice(state, FederalState, "state")
    if health is not None:
        updates["health_type"] = _parse_choice(health, HealthType, "health type", upper=False)
    if pkv_premium is not None:
        updates["pkv_premium_monthly"] = pkv_premium

    with _fail_on_error():
        store, conn = _open_store(db)
        try:
            current = store.load()
            data = EstimateInput.model_validate({**current.model_dump(), **updates})
            if save:
                store.save(data)
        finally:
            conn.close()

    engine = NetSalaryEstimator(
        options=EstimatorOptions(private_premium=not exclude_pkv_premium, language=lang)
    )
    result = engine.estimate(data)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    _print_estimate(data, result, lang)


@app.command(name="export")
def export_cmd(
    path: Path | None = typer.Argument(
        None, help="Target file (default: toolstack-nettoit-v1-<date>.json)"
    ),
    db: Path = DbOption,
) -> None:
    """Export the saved input as a JSON backup file."""
    from nettoit.storage.documents import export_filename

    target = path or Path(export_filename())
    with _fail_on_error():
        store, conn = _open_store(db)
        try:
            store.export_file(target)
        finally:
            conn.close()
    typer.echo(f"Exported to {target}")


@app.command(name="import")
def import_cmd(
    path: Path = typer.Argument(..., help="JSON file previously written by `nettoit export`"),
    db: Path = DbOption,
) -> None:
    """Import a JSON backup file, replacing the saved input."""
    from nettoit.exceptions import DocumentImportError

    if not path.is_file():
        typer.echo(f"Error: File not found: {path}", err=True)
        raise typer.Exit(1)

    with _fail_on_error():
        store, conn = _open_store(db)
        try:
            data = store.import_file(path)
        except DocumentImportError:
            typer.echo("Import failed: invalid JSON file.", err=True)
            raise typer.Exit(1)
        finally:
            conn.close()

    typer.echo(
        f"Imported {path.name}: gross {data.gross_monthly}, tax class {data.tax_class.value}, "
        f"state {data.state.value}, health {data.health_type.value}"
    )


@app.command()
def report(
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file (default: nettoit_report.<format>)"
    ),
    fmt: str = typer.Option("txt", "--format", "-f", help="Report format: txt, html"),
    exclude_pkv_premium: bool = typer.Option(
        False,
        "--exclude-pkv-premium",
        help="Do not deduct the private premium from net",
    ),
    language: str = LanguageOption,
    db: Path = DbOption,
) -> None:
    """Render the printable report for the saved input."""
    from nettoit.engines.estimator import EstimatorOptions, NetSalaryEstimator
    from nettoit.reports import REPORT_FORMATS, NetSalaryReportGenerator

    lang = _parse_language(language)
    fmt = fmt.lower()
    if fmt not in REPORT_FORMATS:
        typer.echo(f"Error: Invalid format '{fmt}'. Valid: {', '.join(REPORT_FORMATS)}", err=True)
        raise typer.Exit(1)

    with _fail_on_error():
        store, conn = _open_store(db)
        try:
            data = store.load()
        finally:
            conn.close()

    engine = NetSalaryEstimator(
        options=EstimatorOptions(private_premium=not exclude_pkv_premium, language=lang)
    )
    result = engine.estimate(data)
    content = NetSalaryReportGenerator().render(data, result, fmt=fmt, language=lang)

    target = output or Path(f"nettoit_report.{fmt}")
    with _fail_on_error():
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    typer.echo(f"  [+] Report:  {target}")


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    db: Path = DbOption,
) -> None:
    """Clear the saved input and go back to the defaults."""
    if not yes:
        typer.confirm("Reset Netto-It data? This clears stored data for this app.", abort=True)

    with _fail_on_error():
        store, conn = _open_store(db)
        try:
            store.reset()
        finally:
            conn.close()
    typer.echo("Netto-It data reset.")


@app.command()
def wizard(
    language: str = LanguageOption,
    db: Path = DbOption,
) -> None:
    """Interactive form: enter your data step by step and see the estimate."""
    from nettoit.wizard import run_wizard

    lang = _parse_language(language)
    with _fail_on_error():
        run_wizard(db, language=lang)


if __name__ == "__main__":
    app()
