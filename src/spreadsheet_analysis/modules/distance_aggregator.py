from typing import Any, List, Optional

from loguru import logger

from pydantic_models.data.workbook import Sheet, Workbook
from shared_modules.utils import safe_str

from .value_parsers import parse_kilometers

# exakter Vergleich der getrimmten Kopfzelle
KM_HEADER_EXACT: tuple[str, ...] = ("km rodado", "km total", "km")
# Teilstring; "quilômetro" nur mit Akzent
KM_HEADER_PARTIAL: tuple[str, ...] = ("km rodado", "km total", "quilômetro", "kilometro")


def is_distance_header(cell: Any) -> bool:
    text = safe_str(cell).lower().strip()
    if not text:
        return False
    return text in KM_HEADER_EXACT or any(token in text for token in KM_HEADER_PARTIAL)


def find_distance_column(header: List[Any]) -> Optional[int]:
    for idx, cell in enumerate(header):
        if is_distance_header(cell):
            return idx
    return None


def sum_sheet_distances(sheet: Sheet) -> float:
    """
    Summe der positiven km-Werte eines Blatts; Blätter ohne km-Spalte ergeben 0.0.
    Nicht lesbare, negative und Null-Werte werden verworfen.
    """
    col_idx = find_distance_column(sheet.header)
    if col_idx is None:
        return 0.0

    total = 0.0
    skipped = 0
    for row in sheet.data_rows:
        value = sheet.cell(row, col_idx)
        if value is None or value == "":
            continue
        km = parse_kilometers(value)
        if km is None:
            skipped += 1
            continue
        total += km
    logger.debug(
        f"Blatt '{sheet.name}': km-Spalte {col_idx} ({sheet.header[col_idx]!r}), "
        f"Summe {total:.2f}, {skipped} Werte verworfen."
    )
    return total


def sum_distances(workbook: Workbook) -> float:
    """Summiert die km-Spalten aller Blätter."""
    return sum((sum_sheet_distances(sheet) for sheet in workbook.sheets), 0.0)
