# === FILE: a11y_audit/browser/runner.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, List, Optional, Sequence

from playwright.async_api import Browser, BrowserContext, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from a11y_audit.browser.models import PageResult
from a11y_audit.browser.request_filter import RequestFilter
from a11y_audit.browser.session import PageSession
from a11y_audit.config import AuditConfig
from a11y_audit.errors import BrowserLaunchError

__all__ = ("AuditRunner", "ResultCallback")

ResultCallback = Callable[[PageResult], None]


class AuditRunner:
    """
    Owns the headless browser for a whole run and audits URLs one tab at a time.

    The browser is launched in ``__aenter__`` and released in ``__aexit__``,
    also when a session fails. Results always come back in input order.
    """

    def __init__(self, config: AuditConfig, engine_source: str) -> None:
        self.config = config
        self.engine_source = engine_source
        self.request_filter = RequestFilter(config.deny_list)
        self.logger = logging.getLogger("A11yAudit")
        self._playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None

    async def __aenter__(self) -> AuditRunner:
        try:
            self._playwright = await async_playwright().start()
            self.browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                args=list(self.config.browser_args),
            )
            self.context = await self.browser.new_context(
                ignore_https_errors=self.config.ignore_https_errors,
            )
        except PlaywrightError as exc:
            await self._close_quietly()
            raise BrowserLaunchError(f"Cannot launch browser: {exc}") from exc
        self.logger.debug("Browser launched with args %s", self.config.browser_args)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc is None:
            await self.close()
        else:
            # the session error is the one to report
            await self._close_quietly()

    async def close(self) -> None:
        """Release context, browser and Playwright; each step runs even if an earlier one fails."""
        context, browser, playwright = self.context, self.browser, self._playwright
        self.context = self.browser = self._playwright = None
        try:
            if context is not None:
                await context.close()
        finally:
            try:
                if browser is not None:
                    await browser.close()
            finally:
                if playwright is not None:
                    await playwright.stop()

    async def _close_quietly(self) -> None:
        try:
            await self.close()
        except Exception as exc:
            self.logger.error("Browser teardown failed: %s", exc)

    async def run_all(
        self, urls: Sequence[str], on_result: Optional[ResultCallback] = None
    ) -> List[PageResult]:
        if self.context is None:
            raise RuntimeError("Browser not launched")
        self.logger.info("Audit started: %d pages", len(urls))
        start = time.monotonic()
        if self.config.concurrency > 1 and len(urls) > 1:
            results = await self._run_concurrent(urls, on_result)
        else:
            results = await self._run_sequential(urls, on_result)
        duration = time.monotonic() - start
        timed_out = sum(1 for r in results if r.timed_out)
        self.logger.info("Audit finished: %d pages in %.2f s", len(results), duration)
        if timed_out:
            self.logger.info("Skipped after navigation timeout: %d", timed_out)
        return results

    async def audit(self, url: str) -> PageResult:
        if self.context is None:
            raise RuntimeError("Browser not launched")
        session = PageSession(
            self.context,
            url,
            self.request_filter,
            self.engine_source,
            timeout_ms=self.config.timeout_ms,
            wait_until=self.config.wait_until,
            rule_tags=self.config.rule_tags,
            engine_timeout_ms=self.config.engine_timeout_ms,
        )
        async with session:
            return await session.run()

    async def _run_sequential(
        self, urls: Sequence[str], on_result: Optional[ResultCallback]
    ) -> List[PageResult]:
        results: List[PageResult] = []
        for url in urls:
            result = await self.audit(url)
            results.append(result)
            if on_result is not None:
                on_result(result)
        return results

    async def _run_concurrent(
        self, urls: Sequence[str], on_result: Optional[ResultCallback]
    ) -> List[PageResult]:
        semaphore = asyncio.Semaphore(self.config.concurrency)

        async def bounded(url: str) -> PageResult:
            async with semaphore:
                return await self.audit(url)

        tasks = [asyncio.create_task(bounded(url)) for url in urls]
        results: List[PageResult] = []
        pending = set(tasks)
        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    error = task.exception()
                    if error is not None:
                        raise error
                # emit finished results only once every earlier URL is done
                while len(results) < len(tasks) and tasks[len(results)].done():
                    result = tasks[len(results)].result()
                    results.append(result)
                    if on_result is not None:
                        on_result(result)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return results
