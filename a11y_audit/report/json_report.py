# a11y_audit/report/json_report.py

"""
Генерация JSON-отчёта для проекта A11yAudit.

Сериализация объекта AggregatedSummary в файл.
"""
import json
from pathlib import Path

from a11y_audit.aggregator import AggregatedSummary


def render_json(summary: AggregatedSummary, output_path: Path | str) -> Path:
    """
    Сохраняет сводку summary в формате JSON по указанному пути.

    :param summary: объект AggregatedSummary с результатами аудита
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from a11y_audit.report.json_report import render_json
    report_path = render_json(summary, 'reports/a11y.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Запись в файл с отступами и Unicode
    with output.open('w', encoding='utf-8') as f:
        json.dump(summary.as_dict(), f, ensure_ascii=False, indent=2)

    return output
