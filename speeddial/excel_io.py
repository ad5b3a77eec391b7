"""Импорт и экспорт справочников быстрого набора в формате Excel."""
import io
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import pandas as pd
from openpyxl import load_workbook

from .registry import Failure, SpeedDialRegistry

logger = logging.getLogger(__name__)

COLUMNS = [
    'Directory',
    'Code',
    'Number',
]


@dataclass
class RejectedRow:
    """Строка Excel, которую реестр не принял."""

    row_index: int
    directory: str
    code: str
    failure: Failure


@dataclass
class ImportReport:
    added: int = 0
    rejected: List[RejectedRow] = field(default_factory=list)


def export_to_excel(registry: SpeedDialRegistry) -> bytes:
    """Возвращает байты Excel-файла со всеми записями всех справочников."""
    data = []
    names = registry.list_directory_names()
    for name in names.value or []:
        for entry in registry.list_entries(name).value:
            data.append({
                'Directory': name,
                'Code': entry.code,
                'Number': entry.number,
            })
    df = pd.DataFrame(data, columns=COLUMNS)
    buffer = io.BytesIO()
    df.to_excel(buffer, index=False, engine='openpyxl')
    buffer.seek(0)
    return buffer.read()


def _cell_text(value) -> str:
    if value is None:
        return ''
    # Excel хранит номера без дефисов как числа: 911 -> 911.0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def read_rows(file_stream) -> List[Tuple[int, str, str, str]]:
    """Читает (номер строки, справочник, код, номер) из первого листа."""
    wb = load_workbook(file_stream, read_only=True, data_only=True)
    try:
        ws = wb.active
        rows = ws.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            raise ValueError('Пустой файл Excel')
        columns_map = {_cell_text(c).lower(): idx for idx, c in enumerate(header)}
        for key in ('directory', 'code', 'number'):
            if key not in columns_map:
                raise ValueError('Неверный формат столбцов Excel')

        result = []
        for row_idx, row in enumerate(rows, start=2):
            values = [_cell_text(row[columns_map[key]]) if columns_map[key] < len(row) else ''
                      for key in ('directory', 'code', 'number')]
            directory, code, number = values
            if not directory or not code or not number:
                continue
            result.append((row_idx, directory, code, number))
    finally:
        wb.close()
    return result


def import_from_excel(registry: SpeedDialRegistry, file_stream) -> ImportReport:
    """Добавляет записи из Excel через add_number, не обходя проверки реестра."""
    report = ImportReport()
    for row_idx, directory, code, number in read_rows(file_stream):
        outcome = registry.add_number(directory, code, number)
        if outcome:
            report.added += 1
        else:
            report.rejected.append(RejectedRow(row_idx, directory, code, outcome.failure))
    logger.info('Excel import: %d added, %d rejected', report.added, len(report.rejected))
    return report
