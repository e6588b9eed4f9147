# File: tests/conftest.py
"""
Shared fixtures: an in-memory stand-in for Playwright's async browser objects,
so sessions and the runner can be exercised without launching Chromium.
"""
from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from a11y_audit.config import AuditConfig


def axe_violation(rule_id: str, impact: str = "serious", nodes: int = 1) -> Dict[str, Any]:
    """Build a violation entry shaped like axe-core's output."""
    return {
        "id": rule_id,
        "impact": impact,
        "description": f"{rule_id} description",
        "help": f"{rule_id} help",
        "tags": ["wcag2a"],
        "nodes": [{"html": f"<img src='{i}.png'>", "target": [f"img:nth-child({i})"]} for i in range(nodes)],
    }


@dataclass
class PageBehaviour:
    """How a fake page reacts when navigated to a given URL."""

    violations: List[Dict[str, Any]] = field(default_factory=list)
    goto_error: Optional[BaseException] = None
    goto_delay: float = 0.0
    inject_error: Optional[BaseException] = None
    evaluate_error: Optional[BaseException] = None
    evaluate_delay: float = 0.0
    evaluate_result: Any = None
    requests: List[str] = field(default_factory=list)


class FakeRequest:
    def __init__(self, url: str) -> None:
        self.url = url


class FakeRoute:
    def __init__(self, url: str) -> None:
        self.request = FakeRequest(url)
        self.outcome: Optional[str] = None

    async def abort(self) -> None:
        self.outcome = "abort"

    async def continue_(self) -> None:
        self.outcome = "continue"


class FakePage:
    def __init__(self, behaviours: Dict[str, PageBehaviour], events: List[str]) -> None:
        self._behaviours = behaviours
        self._events = events
        self.behaviour = PageBehaviour()
        self.url: Optional[str] = None
        self.handler = None
        self.routes: List[FakeRoute] = []
        self.goto_kwargs: Dict[str, Any] = {}
        self.injected: List[str] = []
        self.evaluated: List[Any] = []
        self.closed = False

    async def route(self, pattern: str, handler) -> None:
        self.handler = handler

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.url = url
        self._events.append(f"goto {url}")
        self.goto_kwargs = kwargs
        self.behaviour = self._behaviours.get(url, PageBehaviour())
        for request_url in [url, *self.behaviour.requests]:
            route = FakeRoute(request_url)
            await self.handler(route)
            self.routes.append(route)
        if self.behaviour.goto_delay:
            await asyncio.sleep(self.behaviour.goto_delay)
        if self.behaviour.goto_error is not None:
            raise self.behaviour.goto_error

    async def add_script_tag(self, **kwargs: Any) -> None:
        if self.behaviour.inject_error is not None:
            raise self.behaviour.inject_error
        self.injected.append(kwargs.get("content", ""))

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.evaluated.append(arg)
        if self.behaviour.evaluate_delay:
            await asyncio.sleep(self.behaviour.evaluate_delay)
        if self.behaviour.evaluate_error is not None:
            raise self.behaviour.evaluate_error
        if self.behaviour.evaluate_result is not None:
            return self.behaviour.evaluate_result
        return {"violations": self.behaviour.violations, "passes": []}

    def is_closed(self) -> bool:
        return self.closed

    async def close(self) -> None:
        self.closed = True
        self._events.append(f"close {self.url}")


class FakeContext:
    def __init__(self, behaviours: Dict[str, PageBehaviour], **options: Any) -> None:
        self.behaviours = behaviours
        self.options = options
        self.pages: List[FakePage] = []
        self.events: List[str] = []
        self.close_error: Optional[BaseException] = None
        self.closed = False

    async def new_page(self) -> FakePage:
        self.events.append("open")
        page = FakePage(self.behaviours, self.events)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        if self.close_error is not None:
            raise self.close_error
        self.closed = True

    @property
    def visited(self) -> List[Optional[str]]:
        return [page.url for page in self.pages]


class FakeBrowser:
    def __init__(self, behaviours: Dict[str, PageBehaviour], launch_options: Dict[str, Any]) -> None:
        self.behaviours = behaviours
        self.context_close_error: Optional[BaseException] = None
        self.launch_options = launch_options
        self.contexts: List[FakeContext] = []
        self.closed = False

    async def new_context(self, **options: Any) -> FakeContext:
        context = FakeContext(self.behaviours, **options)
        context.close_error = self.context_close_error
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.closed = True


class FakePlaywright:
    """Plays the role of both ``async_playwright()`` and the started Playwright object."""

    def __init__(self) -> None:
        self.behaviours: Dict[str, PageBehaviour] = {}
        self.launch_error: Optional[BaseException] = None
        self.context_close_error: Optional[BaseException] = None
        self.browsers: List[FakeBrowser] = []
        self.started = 0
        self.stopped = 0
        self.chromium = self

    def __call__(self) -> FakePlaywright:
        return self

    async def start(self) -> FakePlaywright:
        self.started += 1
        return self

    async def stop(self) -> None:
        self.stopped += 1

    async def launch(self, **options: Any) -> FakeBrowser:
        if self.launch_error is not None:
            raise self.launch_error
        browser = FakeBrowser(self.behaviours, options)
        browser.context_close_error = self.context_close_error
        self.browsers.append(browser)
        return browser

    @property
    def browser(self) -> FakeBrowser:
        return self.browsers[-1]

    @property
    def context(self) -> FakeContext:
        return self.browser.contexts[-1]


@pytest.fixture()
def fake_playwright(monkeypatch) -> FakePlaywright:
    """Replace ``async_playwright`` in the runner with the in-memory fake."""
    fake = FakePlaywright()
    monkeypatch.setattr("a11y_audit.browser.runner.async_playwright", fake)
    return fake


@pytest.fixture()
def fake_context() -> FakeContext:
    return FakeContext({})


@pytest.fixture()
def engine_file(tmp_path) -> Path:
    path = tmp_path / "axe.min.js"
    path.write_text("window.axe = { run: async () => ({ violations: [] }) };", encoding="utf-8")
    return path


@pytest.fixture()
def basic_config(engine_file) -> AuditConfig:
    """
    Return a basic valid AuditConfig that never touches the network.
    """
    return AuditConfig(timeout_ms=1000, engine_script=str(engine_file))


@pytest.fixture()
def urls_file(tmp_path):
    """Write a URL list and return its path."""

    def _write(urls: Any) -> Path:
        path = tmp_path / "urls.json"
        path.write_text(json.dumps(urls), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def timeout_error() -> PlaywrightTimeoutError:
    return PlaywrightTimeoutError("Timeout 1000ms exceeded.")


@pytest.fixture()
def navigation_error() -> PlaywrightError:
    return PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
