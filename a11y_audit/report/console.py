# File: a11y_audit/report/console.py
"""a11y_audit.report.console: Вывод сводки аудита в консоль CI и вычисление кода выхода."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable

import click

from a11y_audit.aggregator import AggregatedSummary
from a11y_audit.browser.models import PageResult

Echo = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Результат запуска: сводка и признак провала для CI."""

    summary: AggregatedSummary
    failed: bool

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


class Reporter:
    """
    Печатает подробности нарушений, сводку по URL и по правилам, общий итог.

    Каждое нарушение оборачивается маркерами ``::group::``/``::endgroup::``,
    чтобы CI мог свернуть полный JSON.
    """

    def __init__(self, echo: Echo = click.echo) -> None:
        self.echo = echo

    def render(self, summary: AggregatedSummary) -> RunOutcome:
        for page in summary.pages:
            self._render_page(page)

        self.echo("\nSummary of Accessibility Tests:")
        timed_out = set(summary.timed_out_urls)
        for url, count in summary.per_url_counts.items():
            suffix = " (timed out)" if url in timed_out else ""
            self.echo(f"{url}: {count} violations{suffix}")

        self.echo("\nAggregated Data:")
        for rule_id, count in summary.per_rule_counts.items():
            self.echo(f"{rule_id}: {count}")

        if summary.total_violations > 0:
            self.echo(
                f"\nTotal Accessibility Violations across all pages: {summary.total_violations}"
            )
        else:
            self.echo("\nNo accessibility violations found in any page")

        return RunOutcome(summary=summary, failed=summary.total_violations > 0)

    def _render_page(self, page: PageResult) -> None:
        if page.timed_out:
            self.echo(f"Timed out while loading {page.url}, page skipped")
            return
        if not page.violations:
            self.echo(f"No accessibility violations found for {page.url}")
            return
        for violation in page.violations:
            self.echo(f"::group::Violation ID: {violation.rule_id} - {page.url}")
            self.echo(json.dumps(violation.payload, ensure_ascii=False, indent=2))
            self.echo("::endgroup::")


def render(summary: AggregatedSummary, echo: Echo = click.echo) -> RunOutcome:
    """Сокращение для Reporter(echo).render(summary)."""
    return Reporter(echo).render(summary)


__all__ = ["Reporter", "RunOutcome", "render"]
