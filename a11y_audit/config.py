# === FILE: a11y_audit/config.py ===
"""
Модуль для загрузки и валидации конфигурации аудита A11yAudit.
Используется Pydantic для описания схемы и проверки данных.
Здесь же загружается список проверяемых URL.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from a11y_audit.errors import UrlListError
from a11y_audit.logger import logger

DEFAULT_DENY_LIST: tuple[str, ...] = (
    "dap.digitalgov.gov",
    "maps.googleapis.com",
    "www.google-analytics.com",
    "www.googletagmanager.com",
)

DEFAULT_RULE_TAGS: tuple[str, ...] = ("wcag2a", "wcag2aa", "section508", "best-practice")

DEFAULT_ENGINE_SCRIPT = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"

DEFAULT_BROWSER_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-web-security",
    "--disable-site-isolation-trials",
    "--disable-notifications",
    "--no-zygote",
)


class AuditConfig(BaseModel):
    """Конфигурация для одного запуска аудита."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout_ms: int = Field(60000, gt=0, description="Таймаут навигации на одну страницу (мс).")
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        "networkidle", description="Событие, которого ждёт навигация."
    )
    deny_list: List[str] = Field(
        default_factory=lambda: list(DEFAULT_DENY_LIST),
        description="Подстроки URL сторонних сервисов, запросы к которым блокируются.",
    )
    rule_tags: List[str] = Field(
        default_factory=lambda: list(DEFAULT_RULE_TAGS),
        min_length=1,
        description="Теги правил axe-core (runOnly).",
    )
    engine_script: str = Field(
        DEFAULT_ENGINE_SCRIPT, min_length=1, description="Путь или URL к axe.min.js."
    )
    engine_timeout_ms: Optional[int] = Field(
        None, gt=0, description="Таймаут выполнения axe.run (мс); None означает без ограничения."
    )
    headless: bool = Field(True, description="Запускать браузер без окна.")
    browser_args: List[str] = Field(
        default_factory=lambda: list(DEFAULT_BROWSER_ARGS),
        description="Аргументы командной строки Chromium.",
    )
    ignore_https_errors: bool = Field(True, description="Игнорировать ошибки сертификатов.")
    concurrency: int = Field(1, ge=1, description="Сколько страниц проверять одновременно.")

    @field_validator("deny_list", "rule_tags", mode="after")
    def _drop_blank(cls, v: List[str]) -> List[str]:
        return [item.strip() for item in v if item.strip()]


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> AuditConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AuditConfig.
    Без пути берётся configs/default.yaml, а если его нет, то значения по умолчанию.
    При отсутствии явно указанного файла бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            logger.debug("No %s found, using built-in defaults", _DEFAULT_CFG)
            return AuditConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return AuditConfig(**data)


_URL_LIST = TypeAdapter(List[str])


def remove_duplicates(urls: List[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique


def load_urls(path: Union[str, Path]) -> List[str]:
    """
    Читает JSON-массив строк с адресами страниц.
    Любая ошибка чтения или разбора превращается в UrlListError.
    """
    p = Path(path).expanduser()
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise UrlListError(f"Не удалось прочитать список URL {p}: {exc}") from exc
    try:
        urls = _URL_LIST.validate_json(raw)
    except ValidationError as exc:
        raise UrlListError(f"{p} должен содержать JSON-массив строк: {exc}") from exc
    urls = remove_duplicates(urls)
    logger.debug("Loaded %d URLs from %s", len(urls), p)
    return urls


__all__ = [
    "AuditConfig",
    "DEFAULT_DENY_LIST",
    "DEFAULT_RULE_TAGS",
    "load_config",
    "load_urls",
]
