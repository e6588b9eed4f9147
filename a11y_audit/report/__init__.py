"""a11y_audit.report: Вывод результатов аудита (консоль, JSON и HTML), используемый CLI и тестами."""

from a11y_audit.report.console import Reporter, RunOutcome, render
from a11y_audit.report.html_report import render_html
from a11y_audit.report.json_report import render_json

__all__ = ["Reporter", "RunOutcome", "render", "render_json", "render_html"]
