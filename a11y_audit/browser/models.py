# a11y_audit/browser/models.py
"""
Data models for the audit runner: rule-engine violations and per-page results.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


class Impact(Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class Violation:
    """A single rule-engine finding.

    Only ``rule_id`` is interpreted by the aggregator; ``payload`` keeps the
    engine's mapping untouched so the reporter can print it verbatim.
    """

    rule_id: str
    impact: Optional[Impact]
    description: str
    nodes: Tuple[Any, ...] = ()
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_axe(cls, entry: Mapping[str, Any]) -> Violation:
        try:
            impact = Impact(entry.get("impact"))
        except ValueError:
            impact = None
        return cls(
            rule_id=str(entry.get("id", "")),
            impact=impact,
            description=str(entry.get("description", "")),
            nodes=tuple(entry.get("nodes") or ()),
            payload=dict(entry),
        )


@dataclass(frozen=True, slots=True)
class PageResult:
    """Outcome of one page session. A timed-out page never carries violations."""

    url: str
    violations: Tuple[Violation, ...] = ()
    timed_out: bool = False

    def __post_init__(self) -> None:
        if self.timed_out and self.violations:
            raise ValueError(f"timed-out result for {self.url} cannot carry violations")

    @classmethod
    def timeout(cls, url: str) -> PageResult:
        return cls(url=url, violations=(), timed_out=True)

    @property
    def violation_count(self) -> int:
        return len(self.violations)
