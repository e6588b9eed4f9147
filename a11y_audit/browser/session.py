# === FILE: a11y_audit/browser/session.py ===
from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, List, Optional, Tuple

from playwright.async_api import BrowserContext, Page, Route
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from a11y_audit.browser.models import PageResult, Violation
from a11y_audit.browser.request_filter import FilterDecision, RequestFilter
from a11y_audit.config import DEFAULT_RULE_TAGS
from a11y_audit.errors import NavigationError, RuleEngineError

__all__ = ("PageSession",)

_AXE_RUN = "async (options) => await axe.run(document, options)"


class PageSession:
    """
    One browser tab auditing one URL.

    The tab is opened in ``__aenter__`` and closed in ``__aexit__`` on every
    exit path. A navigation timeout yields a timed-out :class:`PageResult`;
    any other navigation or rule-engine failure is raised.
    """

    def __init__(
        self,
        context: BrowserContext,
        url: str,
        request_filter: RequestFilter,
        engine_source: str,
        *,
        timeout_ms: int = 60000,
        wait_until: str = "networkidle",
        rule_tags: Iterable[str] = DEFAULT_RULE_TAGS,
        engine_timeout_ms: Optional[int] = None,
    ) -> None:
        self.context = context
        self.url = url
        self.request_filter = request_filter
        self.engine_source = engine_source
        self.timeout_ms = timeout_ms
        self.wait_until = wait_until
        self.rule_tags: Tuple[str, ...] = tuple(rule_tags)
        self.engine_timeout_ms = engine_timeout_ms
        self.page: Optional[Page] = None
        self.blocked_requests: List[str] = []
        self.logger = logging.getLogger("A11yAudit")

    async def __aenter__(self) -> PageSession:
        self.page = await self.context.new_page()
        try:
            await self.page.route("**/*", self._intercept)
        except BaseException:
            await self.page.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.page is not None and not self.page.is_closed():
            await self.page.close()

    async def run(self) -> PageResult:
        if self.page is None:
            raise RuntimeError("Page not opened")
        self.logger.info("Auditing %s", self.url)
        try:
            await self.page.goto(self.url, wait_until=self.wait_until, timeout=self.timeout_ms)
        except PlaywrightTimeoutError:
            self.logger.warning("Timeout while loading URL: %s", self.url)
            await self.page.close()
            return PageResult.timeout(self.url)
        except PlaywrightError as exc:
            raise NavigationError(self.url, exc) from exc

        violations = await self._audit(self.page)
        if self.blocked_requests:
            self.logger.debug("%s: blocked %d requests", self.url, len(self.blocked_requests))
        self.logger.info("%s: %d violations", self.url, len(violations))
        return PageResult(url=self.url, violations=tuple(violations), timed_out=False)

    async def _intercept(self, route: Route) -> None:
        request_url = route.request.url
        if self.request_filter.decide(request_url) is FilterDecision.ABORT:
            self.blocked_requests.append(request_url)
            await route.abort()
        else:
            await route.continue_()

    async def _audit(self, page: Page) -> List[Violation]:
        try:
            await page.add_script_tag(content=self.engine_source)
        except PlaywrightError as exc:
            raise RuleEngineError(f"Cannot inject rule engine: {exc}", self.url) from exc

        options = {"runOnly": {"type": "tag", "values": list(self.rule_tags)}}
        try:
            if self.engine_timeout_ms is None:
                results = await page.evaluate(_AXE_RUN, options)
            else:
                results = await asyncio.wait_for(
                    page.evaluate(_AXE_RUN, options), timeout=self.engine_timeout_ms / 1000
                )
        except asyncio.TimeoutError as exc:
            raise RuleEngineError(
                f"Rule engine did not finish within {self.engine_timeout_ms} ms", self.url
            ) from exc
        except PlaywrightError as exc:
            raise RuleEngineError(f"Rule engine failed: {exc}", self.url) from exc

        return self._parse(results)

    def _parse(self, results: Any) -> List[Violation]:
        raw = results.get("violations") if isinstance(results, dict) else None
        if not isinstance(raw, list):
            raise RuleEngineError("Rule engine returned no violation list", self.url)
        return [Violation.from_axe(entry) for entry in raw]
