# a11y_audit/browser/engine_script.py
"""
Loads the axe-core source that every page session injects.

The script is read once per run, either from a local file or over HTTP(S),
so pages never fetch it themselves.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Union
from urllib.parse import urlparse

from aiohttp import ClientError, ClientSession, ClientTimeout

from a11y_audit.errors import RuleEngineError
from a11y_audit.logger import logger

DOWNLOAD_TIMEOUT = 30.0


def _is_remote(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


async def _download(url: str, timeout: float) -> str:
    async with ClientSession(timeout=ClientTimeout(total=timeout)) as session:
        async with session.get(url) as resp:
            if resp.status != 200:
                raise RuleEngineError(f"Rule engine download returned HTTP {resp.status}", url)
            return await resp.text()


async def load_engine_script(location: Union[str, Path], timeout: float = DOWNLOAD_TIMEOUT) -> str:
    """
    Return the rule-engine source found at *location* (file path or http(s) URL).

    Raises RuleEngineError when the script is unreachable or empty.
    """
    location = str(location)
    if _is_remote(location):
        logger.info("Downloading rule engine from %s", location)
        try:
            source = await _download(location, timeout)
        except (ClientError, asyncio.TimeoutError) as exc:
            raise RuleEngineError(f"Cannot download rule engine: {exc}", location) from exc
    else:
        path = Path(location).expanduser()
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise RuleEngineError(f"Cannot read rule engine: {exc}", str(path)) from exc

    if not source.strip():
        raise RuleEngineError("Rule engine script is empty", location)
    logger.debug("Rule engine loaded: %d characters", len(source))
    return source


__all__ = ["load_engine_script"]
