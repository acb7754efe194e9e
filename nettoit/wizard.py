"""Interactive step-by-step form for Netto-It.

Walks the user through every estimator input:
  Step 1 — Salary (gross monthly, tax class, church tax)
  Step 2 — Family & region (children allowance, federal state)
  Step 3 — Health insurance (public/private, private premium)
  Step 4 — Estimate (breakdown tables, autosave)
  Step 5 — Report (optional printable file)

Previously saved answers are offered as defaults.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from functools import partial
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.rule import Rule
from rich.table import Table

from nettoit.cli import BANNER
from nettoit.engines.estimator import EstimatorOptions, NetSalaryEstimator
from nettoit.formatting import format_eur
from nettoit.i18n import translate
from nettoit.models.enums import FederalState, HealthType, Language, TaxClass
from nettoit.models.inputs import (
    MAX_CHILD_ALLOWANCE,
    MAX_GROSS_MONTHLY,
    MAX_PKV_PREMIUM_MONTHLY,
    ZERO,
    EstimateInput,
)
from nettoit.models.results import EstimateResult

_TAX_CLASS_CHOICES = [tc.value for tc in TaxClass]
_STATE_CHOICES = [s.value for s in FederalState]
_HEALTH_CHOICES = [h.value for h in HealthType]

# ---------------------------------------------------------------------------
# Decimal prompt helper
# ---------------------------------------------------------------------------


def _parse_amount(raw: str) -> Decimal:
    """Parse a typed amount; ``,`` is accepted as decimal separator."""
    value = Decimal(raw.strip().replace(",", ".", 1))
    if not value.is_finite():
        raise InvalidOperation(raw)
    return value


def _prompt_decimal(
    label: str,
    default: Decimal,
    console: Console,
    maximum: Decimal,
) -> Decimal:
    """Prompt the user for a Decimal in [0, maximum], retrying on bad input."""
    while True:
        raw = Prompt.ask(label, default=str(default), console=console)
        try:
            value = _parse_amount(raw)
        except InvalidOperation:
            console.print(f"[red]Invalid number: {raw!r}. Try again.[/red]")
            continue
        if value < ZERO or value > maximum:
            console.print(f"[red]Value must be between 0 and {maximum}. Try again.[/red]")
            continue
        return value


def _show_step_header(step_num: int, title: str, console: Console) -> None:
    console.print()
    console.print(Rule(f"Step {step_num}: {title}", style="bold cyan"))
    console.print()


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def _collect_input(current: EstimateInput, console: Console) -> EstimateInput:
    _show_step_header(1, "Salary", console)
    gross = _prompt_decimal(
        "Gross monthly salary (EUR)", current.gross_monthly, console, MAX_GROSS_MONTHLY
    )
    tax_class = Prompt.ask(
        "Tax class",
        choices=_TAX_CLASS_CHOICES,
        default=current.tax_class.value,
        console=console,
    )
    church_tax = Confirm.ask("Church tax?", default=current.church_tax, console=console)

    _show_step_header(2, "Family & region", console)
    children = _prompt_decimal(
        "Children allowance (0-10, halves allowed)",
        current.child_allowance,
        console,
        MAX_CHILD_ALLOWANCE,
    )
    state = Prompt.ask(
        "Federal state",
        choices=_STATE_CHOICES,
        default=current.state.value,
        console=console,
    )

    _show_step_header(3, "Health insurance", console)
    health = Prompt.ask(
        "Health insurance",
        choices=_HEALTH_CHOICES,
        default=current.health_type.value,
        console=console,
    )
    premium = current.pkv_premium_monthly
    if health == HealthType.PRIVATE.value:
        premium = _prompt_decimal(
            "Private premium per month (EUR)", premium, console, MAX_PKV_PREMIUM_MONTHLY
        )

    return EstimateInput(
        gross_monthly=gross,
        tax_class=tax_class,
        church_tax=church_tax,
        child_allowance=children,
        state=state,
        health_type=health,
        pkv_premium_monthly=premium,
    )


def _display_estimate(result: EstimateResult, language: Language, console: Console) -> None:
    """Pretty-print an EstimateResult using Rich."""
    t = partial(translate, language=language)

    social = Table(title=t("report.social_breakdown"), show_header=False, padding=(0, 1))
    social.add_column("", style="cyan", min_width=30)
    social.add_column("", justify="right", style="green")
    social.add_row(t("report.pension"), format_eur(result.social.rv))
    social.add_row(t("report.unemployment"), format_eur(result.social.av))
    social.add_row(t("report.health_insurance"), format_eur(result.social.kv))
    social.add_row(t("report.care"), format_eur(result.social.pv))
    social.add_row(f"[bold]{t('report.social_annual')}[/bold]", format_eur(result.social.total_annual))
    console.print(social)
    console.print(f"[dim]{result.social.note}[/dim]")
    console.print()

    taxes = Table(title=t("report.taxes_breakdown"), show_header=False, padding=(0, 1))
    taxes.add_column("", style="cyan", min_width=30)
    taxes.add_column("", justify="right", style="green")
    taxes.add_row(t("report.taxable_income"), format_eur(result.taxable_income_annual))
    taxes.add_row(t("report.income_tax"), format_eur(result.taxes.income_tax_annual))
    taxes.add_row(t("report.soli"), format_eur(result.taxes.soli_annual))
    taxes.add_row(t("report.church"), format_eur(result.taxes.church_annual))
    taxes.add_row(f"[bold]{t('report.taxes_annual')}[/bold]", format_eur(result.taxes.total_annual))
    console.print(taxes)
    console.print()

    summary = Table(title=t("report.summary"), show_header=False, padding=(0, 1))
    summary.add_column("", style="cyan", min_width=30)
    summary.add_column("", justify="right", style="green")
    summary.add_row(t("report.gross_annual"), format_eur(result.gross_annual))
    if result.pkv_premium_monthly > 0:
        summary.add_row(t("report.pkv_annual"), format_eur(result.pkv_premium_monthly * 12))
    summary.add_row(t("report.net_annual"), format_eur(result.net_annual))
    summary.add_row(
        f"[bold]{t('report.net_monthly')}[/bold]",
        f"[bold]{format_eur(result.net_monthly)}[/bold]",
    )
    console.print(summary)


def _write_report(
    data: EstimateInput,
    result: EstimateResult,
    language: Language,
    console: Console,
) -> Path | None:
    from nettoit.reports import REPORT_FORMATS, NetSalaryReportGenerator

    if not Confirm.ask("Generate a printable report?", default=False, console=console):
        return None
    fmt = Prompt.ask("Format", choices=list(REPORT_FORMATS), default="html", console=console)
    target = Path(
        Prompt.ask("Output file", default=f"nettoit_report.{fmt}", console=console)
    )
    content = NetSalaryReportGenerator().render(data, result, fmt=fmt, language=language)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Could not write report: {exc}[/red]")
        return None
    console.print(f"[green]✓[/green] Report written to {target}")
    return target


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def run_wizard(
    db: Path,
    language: Language = Language.EN,
    console: Console | None = None,
) -> EstimateResult:
    """Main wizard orchestration — called from cli.py."""
    from nettoit.storage import InputStore, SQLiteStorage, create_schema

    if console is None:
        console = Console()

    console.print(
        Panel(
            f"[bold green]{BANNER}[/bold green]\n"
            "[bold]German net salary estimate[/bold]\n\n"
            "Answer a few questions; press Enter to keep the saved value.",
            title="[bold cyan]Netto-It Wizard[/bold cyan]",
            border_style="cyan",
        )
    )

    db.parent.mkdir(parents=True, exist_ok=True)
    conn = create_schema(db)
    try:
        store = InputStore(SQLiteStorage(conn))
        data = _collect_input(store.load(), console)
        store.save(data)

        _show_step_header(4, "Estimate", console)
        engine = NetSalaryEstimator(options=EstimatorOptions(language=language))
        result = engine.estimate(data)
        _display_estimate(result, language, console)

        _show_step_header(5, "Report", console)
        _write_report(data, result, language, console)

        console.print()
        console.print(
            Panel(
                f"[bold]Net monthly:[/bold] {format_eur(result.net_monthly)}\n"
                f"[bold]Database:[/bold] {db}\n\n"
                "[bold green]Wizard complete![/bold green]",
                title="[bold cyan]Netto-It — Done[/bold cyan]",
                border_style="cyan",
            )
        )
    finally:
        conn.close()
    return result
