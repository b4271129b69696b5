"""
Einlesen hochgeladener Planilhas (.xlsx, .xls, .csv) in ein Workbook-Modell.

Die Zellwerte behalten ihren Typ: Zahlen bleiben Zahlen, Text bleibt Text,
Datums- und Dauerwerte bleiben date/time/datetime/timedelta. Die Auswertungen
unterscheiden danach, wie ein Wert gelesen wird.
"""
from __future__ import annotations

import csv
import io
import re
from pathlib import Path
from typing import Any, List

import pandas as pd
from loguru import logger
from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from pydantic_models.data.workbook import Sheet, Workbook
from shared_modules.errors import FileKind, MalformedFileError, ReadFailureError

_CSV_DELIMITERS = ",;\t|"
_CSV_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)$", re.ASCII)


def read_upload(path: Path) -> bytes:
    """
    Liest die Datei vollständig ein. Jeder Lesefehler wird zu ReadFailureError.
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        logger.error(f"Datei {path} konnte nicht gelesen werden: {e}")
        raise ReadFailureError(f"Erro ao ler arquivo: {e}") from e


def load_workbook_bytes(data: bytes, kind: FileKind) -> Workbook:
    """
    Dekodiert die Rohdaten je nach Dateiart. Lässt sich keine Tabellenstruktur
    erkennen, wird MalformedFileError ausgelöst.
    """
    readers = {
        FileKind.XLSX: _read_xlsx,
        FileKind.XLS: _read_xls,
        FileKind.CSV: _read_csv,
    }
    try:
        workbook = readers[kind](data)
    except MalformedFileError:
        raise
    except Exception as e:
        logger.error(f"Planilha ({kind.value}) konnte nicht dekodiert werden: {e}")
        raise MalformedFileError(f"Erro ao processar planilha: {e}") from e

    if not workbook.sheets:
        logger.error("Planilha enthält keine Tabellenblätter.")
        raise MalformedFileError("Erro ao processar planilha: nenhuma aba encontrada")
    logger.debug(f"Planilha gelesen: {len(workbook.sheets)} Blätter {workbook.sheet_names}")
    return workbook


def _trim_empty(rows: List[List[Any]]) -> List[List[Any]]:
    if all(value is None for row in rows for value in row):
        return []
    return rows


def _worksheet_rows(ws: Worksheet) -> List[List[Any]]:
    # Der benutzte Bereich beginnt bei der ersten belegten Zeile/Spalte; diese wird Zeile/Spalte 0.
    rows = [
        list(row)
        for row in ws.iter_rows(
            min_row=ws.min_row,
            max_row=ws.max_row,
            min_col=ws.min_column,
            max_col=ws.max_column,
            values_only=True,
        )
    ]
    return _trim_empty(rows)


def _read_xlsx(data: bytes) -> Workbook:
    wb = load_workbook(io.BytesIO(data), data_only=True)
    return Workbook(sheets=[Sheet(name=ws.title, rows=_worksheet_rows(ws)) for ws in wb.worksheets])


def _read_xls(data: bytes) -> Workbook:
    frames = pd.read_excel(io.BytesIO(data), sheet_name=None, header=None, engine="xlrd")
    sheets = []
    for name, df in frames.items():
        df = df.astype(object).where(pd.notna(df), None)
        sheets.append(Sheet(name=str(name), rows=_trim_empty(df.values.tolist())))
    return Workbook(sheets=sheets)


def _decode_text(data: bytes) -> str:
    if b"\x00" in data:
        raise MalformedFileError("Erro ao processar planilha: arquivo binário não é um CSV")
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("CSV ist kein UTF-8, lese als latin-1.")
        return data.decode("latin-1")


def _sniff_delimiter(text: str) -> str:
    sample = "\n".join(text.splitlines()[:20])
    try:
        return csv.Sniffer().sniff(sample, delimiters=_CSV_DELIMITERS).delimiter
    except csv.Error:
        return ","


def _csv_cell(raw: str) -> Any:
    """Leere Felder fehlen, reine Dezimalzahlen werden Zahlen, der Rest bleibt Text."""
    if raw == "":
        return None
    stripped = raw.strip()
    if _CSV_NUMBER_RE.match(stripped):
        return float(stripped) if "." in stripped else int(stripped)
    return raw


def _read_csv(data: bytes) -> Workbook:
    text = _decode_text(data)
    reader = csv.reader(io.StringIO(text), delimiter=_sniff_delimiter(text))
    rows = [[_csv_cell(field) for field in record] for record in reader]
    return Workbook(sheets=[Sheet(name="Sheet1", rows=rows)])
