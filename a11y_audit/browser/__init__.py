"""a11y_audit.browser: headless-browser side of the audit (request filter, page session, runner)."""

from a11y_audit.browser.engine_script import load_engine_script
from a11y_audit.browser.models import Impact, PageResult, Violation
from a11y_audit.browser.request_filter import FilterDecision, RequestFilter
from a11y_audit.browser.runner import AuditRunner
from a11y_audit.browser.session import PageSession

__all__ = [
    "AuditRunner",
    "FilterDecision",
    "Impact",
    "PageResult",
    "PageSession",
    "RequestFilter",
    "Violation",
    "load_engine_script",
]
