from typing import Any, List, Optional

from loguru import logger

from pydantic_models.data.workbook import Workbook
from shared_modules.utils import safe_str

from .value_parsers import parse_hours

DURATION_HEADER_TOKENS: tuple[str, ...] = ("duração", "duracao")


def find_duration_column(header: List[Any]) -> Optional[int]:
    """Index der ersten Kopfzelle, die 'duração' oder 'duracao' enthält (ohne Gross-/Kleinschreibung)."""
    for idx, cell in enumerate(header):
        text = safe_str(cell).lower()
        if any(token in text for token in DURATION_HEADER_TOKENS):
            return idx
    return None


def sum_durations(workbook: Workbook) -> float:
    """
    Summiert die Dauer-Spalte des ersten Blatts in Stunden.
    Ohne passende Kopfzeile ist das Ergebnis 0.0.
    """
    sheet = workbook.first_sheet
    if sheet is None:
        return 0.0

    col_idx = find_duration_column(sheet.header)
    if col_idx is None:
        logger.debug(f"Blatt '{sheet.name}': keine Dauer-Spalte gefunden.")
        return 0.0
    logger.debug(f"Blatt '{sheet.name}': Dauer-Spalte {col_idx} ({sheet.header[col_idx]!r}).")

    total = 0.0
    for row in sheet.data_rows:
        value = sheet.cell(row, col_idx)
        if value is None or value == "":
            continue
        total += parse_hours(value)
    return total
