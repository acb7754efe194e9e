"""Report generation for Netto-It."""

from nettoit.reports.net_salary import REPORT_FORMATS, NetSalaryReportGenerator

__all__ = ["NetSalaryReportGenerator", "REPORT_FORMATS"]
