# File: a11y_audit/engine.py
"""a11y_audit.engine: Оркестрация аудита поверх AuditRunner и ResultAggregator."""

from __future__ import annotations

from typing import Optional, Sequence

from a11y_audit.aggregator import AggregatedSummary, ResultAggregator
from a11y_audit.browser.engine_script import load_engine_script
from a11y_audit.browser.models import PageResult
from a11y_audit.browser.runner import AuditRunner, ResultCallback
from a11y_audit.config import AuditConfig
from a11y_audit.logger import logger

__all__ = ["start_audit"]


async def start_audit(
    cfg: AuditConfig,
    urls: Sequence[str],
    on_result: Optional[ResultCallback] = None,
) -> AggregatedSummary:
    """
    Проверяет все URL по порядку и возвращает сводку.

    Parameters
    ----------
    cfg : AuditConfig
        Конфигурация аудита.
    urls : Sequence[str]
        Адреса страниц в порядке проверки.
    on_result : callable, optional
        Вызывается для каждого PageResult сразу после его получения.

    Returns
    -------
    AggregatedSummary
        Сводка, построенная по мере поступления результатов.

    Ошибки навигации (кроме таймаута) и ошибки axe-core не перехватываются:
    браузер закрывается, исключение уходит вызывающему коду.
    """
    aggregator = ResultAggregator()
    if not urls:
        logger.info("URL list is empty, nothing to audit")
        return aggregator.summary()

    def collect(result: PageResult) -> None:
        aggregator.add(result)
        if on_result is not None:
            on_result(result)

    engine_source = await load_engine_script(cfg.engine_script)
    async with AuditRunner(cfg, engine_source) as runner:
        await runner.run_all(urls, on_result=collect)
    return aggregator.summary()
