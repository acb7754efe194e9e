"""Printable net salary report generator."""

from datetime import datetime
from functools import partial
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from nettoit.config import STORAGE_KEY
from nettoit.formatting import format_eur, format_percent
from nettoit.i18n import translate
from nettoit.models.enums import FEDERAL_STATE_NAMES, Language
from nettoit.models.inputs import EstimateInput
from nettoit.models.results import EstimateResult

TEMPLATE_DIR = Path(__file__).parent / "templates"

REPORT_FORMATS = ("txt", "html")


class NetSalaryReportGenerator:
    """Renders the report sheet as plain text or print-ready HTML."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["eur"] = format_eur

    def render(
        self,
        data: EstimateInput,
        result: EstimateResult,
        fmt: str = "txt",
        language: Language = Language.EN,
        generated_at: datetime | None = None,
    ) -> str:
        if fmt not in REPORT_FORMATS:
            raise ValueError(f"Unknown report format '{fmt}'. Valid: {', '.join(REPORT_FORMATS)}")
        template = self.env.get_template(f"net_salary.{fmt}")
        stamp = (generated_at or datetime.now()).strftime("%d.%m.%Y, %H:%M:%S")
        return template.render(
            data=data,
            result=result,
            language=language,
            generated_at=stamp,
            state_name=FEDERAL_STATE_NAMES[data.state],
            storage_key=STORAGE_KEY,
            t=partial(translate, language=language),
            pct=partial(format_percent, language=language),
        )
