"""Exception hierarchy of the audit run.

Only a navigation timeout is recoverable and it never surfaces as an
exception: :class:`~a11y_audit.browser.session.PageSession` turns it into a
timed-out page result. Everything below aborts the whole run.
"""


class AuditError(Exception):
    """Base audit exception."""
    pass


class UrlListError(AuditError):
    """Raised when the URL list cannot be read or is not a JSON array of strings."""
    pass


class BrowserLaunchError(AuditError):
    """Raised when the headless browser cannot be started."""
    pass


class NavigationError(AuditError):
    """Raised on a navigation failure other than a timeout."""

    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"Navigation to {url} failed: {reason}")
        self.url = url


class RuleEngineError(AuditError):
    """Raised when the rule engine cannot be loaded, injected or run."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message if url is None else f"{message} ({url})")
        self.url = url


__all__ = [
    "AuditError",
    "UrlListError",
    "BrowserLaunchError",
    "NavigationError",
    "RuleEngineError",
]
