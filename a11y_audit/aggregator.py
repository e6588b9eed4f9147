# File: a11y_audit/aggregator.py
"""a11y_audit.aggregator: Свёртка результатов страниц в сводку нарушений."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from a11y_audit.browser.models import PageResult


@dataclass(frozen=True, slots=True)
class AggregatedSummary:
    """Итог аудита: счётчики по URL (в порядке обработки), по правилам и общий итог."""

    per_url_counts: Mapping[str, int] = field(default_factory=dict)
    per_rule_counts: Mapping[str, int] = field(default_factory=dict)
    total_violations: int = 0
    pages: Tuple[PageResult, ...] = ()

    @property
    def timed_out_urls(self) -> Tuple[str, ...]:
        return tuple(page.url for page in self.pages if page.timed_out)

    def as_dict(self) -> Dict[str, object]:
        """Возвращает JSON-совместимое представление сводки."""
        return {
            "total_violations": self.total_violations,
            "per_url_counts": dict(self.per_url_counts),
            "per_rule_counts": dict(self.per_rule_counts),
            "timed_out": list(self.timed_out_urls),
            "pages": [
                {
                    "url": page.url,
                    "timed_out": page.timed_out,
                    "violations": [dict(v.payload) for v in page.violations],
                }
                for page in self.pages
            ],
        }


class ResultAggregator:
    """Накапливает PageResult по одному, сохраняя порядок поступления."""

    def __init__(self) -> None:
        self._per_url: Dict[str, int] = {}
        self._per_rule: Dict[str, int] = {}
        self._total = 0
        self._pages: list[PageResult] = []

    def add(self, result: PageResult) -> None:
        count = len(result.violations)
        # повторный URL суммируется, чтобы итог совпадал с суммой по URL
        self._per_url[result.url] = self._per_url.get(result.url, 0) + count
        for violation in result.violations:
            self._per_rule[violation.rule_id] = self._per_rule.get(violation.rule_id, 0) + 1
        self._total += count
        self._pages.append(result)

    def summary(self) -> AggregatedSummary:
        """Возвращает неизменяемый снимок текущего состояния."""
        return AggregatedSummary(
            per_url_counts=MappingProxyType(dict(self._per_url)),
            per_rule_counts=MappingProxyType(dict(self._per_rule)),
            total_violations=self._total,
            pages=tuple(self._pages),
        )


def fold(results: Iterable[PageResult]) -> AggregatedSummary:
    """Собирает все результаты в AggregatedSummary."""
    aggregator = ResultAggregator()
    for result in results:
        aggregator.add(result)
    return aggregator.summary()


__all__ = ["AggregatedSummary", "ResultAggregator", "fold"]
