# === FILE: a11y_audit/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска аудита доступности A11yAudit через командную строку.

Команды:
  run URLS_FILE   Проверить страницы из JSON-списка, вывести сводку, вернуть код выхода
                  (повторяющиеся URL проверяются один раз)
  config          Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда run опции:
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблоном report.html.j2
  --timeout-ms INT    Таймаут загрузки одной страницы (override timeout_ms)
  --concurrency INT   Сколько страниц проверять одновременно (override concurrency)

Код выхода: 0, если нарушений нет; 1, если они найдены или аудит прерван ошибкой.

Пример:
  a11y-audit run 508_test_pages.json --json reports/a11y.json
"""
import asyncio
import sys
from pathlib import Path

import click

from a11y_audit import __version__
from a11y_audit.config import load_config, load_urls
from a11y_audit.engine import start_audit
from a11y_audit.errors import AuditError
from a11y_audit.logger import init_logging, logger
from a11y_audit.report.console import Reporter
from a11y_audit.report.html_report import render_html
from a11y_audit.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='A11yAudit, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд A11yAudit CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.argument('urls_file', type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном (по умолчанию встроенный)'
)
@click.option(
    '--timeout-ms', 'timeout_ms',
    type=click.IntRange(min=1),
    default=None,
    help='Таймаут загрузки одной страницы (мс)'
)
@click.option(
    '--concurrency', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Сколько страниц проверять одновременно'
)
@click.pass_context
def run(ctx, urls_file, json_output, html_output, template_dir, timeout_ms, concurrency):
    """Проверить страницы из URLS_FILE и завершиться с кодом 0 или 1.

    Повторяющиеся URL проверяются один раз, в порядке первого появления.
    """
    cfg = ctx.obj['config']
    overrides = {}
    if timeout_ms is not None:
        overrides['timeout_ms'] = timeout_ms
    if concurrency is not None:
        overrides['concurrency'] = concurrency
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    try:
        urls = load_urls(urls_file)
    except AuditError as e:
        logger.error('URL list load failed: %s', e)
        print_error(f'Ошибка загрузки списка URL: {e}')

    try:
        summary = asyncio.run(start_audit(cfg, urls))
    except AuditError as e:
        logger.error('Audit aborted: %s', e)
        print_error(f'Ошибка при аудите: {e}')
    except Exception as e:
        logger.exception('Unexpected error during audit')
        print_error(f'Ошибка при аудите: {e}')

    outcome = Reporter().render(summary)

    # JSON-отчёт
    if json_output:
        try:
            saved_json = render_json(summary, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    # HTML-отчёт
    if html_output:
        try:
            saved_html = render_html(summary, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    ctx.exit(outcome.exit_code)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
