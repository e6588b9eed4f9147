# a11y_audit/browser/request_filter.py
"""
Network-request policy applied to every outbound request of a page session.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Tuple

from a11y_audit.config import DEFAULT_DENY_LIST


class FilterDecision(Enum):
    ALLOW = "allow"
    ABORT = "abort"


class RequestFilter:
    """
    Aborts requests to third-party analytics, tracking and map services.

    A request is aborted when its URL contains any deny-listed substring.
    The filter holds no state besides the deny-list.
    """

    def __init__(self, deny_list: Iterable[str] = DEFAULT_DENY_LIST) -> None:
        self.deny_list: Tuple[str, ...] = tuple(deny_list)

    def decide(self, request_url: str) -> FilterDecision:
        if any(pattern in request_url for pattern in self.deny_list):
            return FilterDecision.ABORT
        return FilterDecision.ALLOW

    def allows(self, request_url: str) -> bool:
        return self.decide(request_url) is FilterDecision.ALLOW

    def __repr__(self) -> str:
        return f"RequestFilter(deny_list={self.deny_list!r})"
