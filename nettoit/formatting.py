"""Currency and percentage formatting for display and reports."""

from decimal import ROUND_HALF_UP, Decimal

from nettoit.models.enums import Language

CENT = Decimal("0.01")


def format_eur(amount: Decimal | int | float) -> str:
    """Format an amount the way de-DE renders EUR: ``1.234,56 €``."""
    value = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    if not value.is_finite():
        value = Decimal("0")
    rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    grouped = f"{abs(rounded):,.2f}"
    # 1,234.56 -> 1.234,56
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{grouped} €"


def format_percent(rate: Decimal, language: Language = Language.EN) -> str:
    """Format a fractional rate: ``0.006`` -> ``0.6%`` (en) / ``0,6 %`` (de)."""
    digits = format((rate * 100).normalize(), "f")
    if language == Language.DE:
        return f"{digits.replace('.', ',')} %"
    return f"{digits}%"
