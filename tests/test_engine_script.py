# File: tests/test_engine_script.py
from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from a11y_audit.browser.engine_script import load_engine_script
from a11y_audit.errors import RuleEngineError

AXE_SOURCE = "window.axe = { run: async () => ({ violations: [] }) };"


@pytest_asyncio.fixture
async def engine_server(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()

    async def handle_axe(_):
        return web.Response(text=AXE_SOURCE, content_type="application/javascript")

    app.router.add_get("/axe.min.js", handle_axe)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", unused_tcp_port)
    await site.start()
    try:
        yield f"http://localhost:{unused_tcp_port}"
    finally:
        await runner.cleanup()


@pytest.mark.asyncio
async def test_load_from_file(engine_file):
    source = await load_engine_script(engine_file)
    assert source == engine_file.read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_missing_file(tmp_path):
    with pytest.raises(RuleEngineError):
        await load_engine_script(tmp_path / "nope.js")


@pytest.mark.asyncio
async def test_empty_file(tmp_path):
    path = tmp_path / "empty.js"
    path.write_text("  \n", encoding="utf-8")
    with pytest.raises(RuleEngineError, match="empty"):
        await load_engine_script(path)


@pytest.mark.asyncio
async def test_download(engine_server):
    source = await load_engine_script(f"{engine_server}/axe.min.js")
    assert source == AXE_SOURCE


@pytest.mark.asyncio
async def test_download_not_found(engine_server):
    with pytest.raises(RuleEngineError, match="HTTP 404"):
        await load_engine_script(f"{engine_server}/missing.js")
