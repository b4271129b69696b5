"""
Fehlerklassen für das Einlesen von Planilhas.

Nur strukturelle Fehler werden ausgelöst. Einzelne Zellen, die sich nicht
auswerten lassen, zählen als 0 und erzeugen keinen Fehler.
"""
from __future__ import annotations

from enum import Enum
from pathlib import PurePath
from typing import Optional


class SpreadsheetError(Exception):
    """Basisklasse; code ist der maschinenlesbare Fehlercode."""

    code: str = "SPREADSHEET_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedFormatError(SpreadsheetError):
    code = "UNSUPPORTED_FORMAT"


class MalformedFileError(SpreadsheetError):
    code = "MALFORMED_FILE"


class ReadFailureError(SpreadsheetError):
    code = "READ_FAILURE"


class FileKind(str, Enum):
    XLSX = "xlsx"
    XLS = "xls"
    CSV = "csv"

    @classmethod
    def from_upload(cls, filename: Optional[str], mime_type: Optional[str] = None) -> "FileKind":
        """
        Bestimmt die Dateiart aus Endung oder MIME-Typ.
        Die Endung hat Vorrang; passt keines von beiden, wird UnsupportedFormatError ausgelöst.
        """
        suffix = PurePath(filename or "").suffix.lower().lstrip(".")
        for kind in cls:
            if suffix == kind.value:
                return kind
        if mime_type in _MIME_TYPES:
            return _MIME_TYPES[mime_type]
        raise UnsupportedFormatError(
            f"Formato inválido: '{filename}'. Use arquivos Excel (.xlsx, .xls) ou CSV."
        )


_MIME_TYPES = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": FileKind.XLSX,
    "application/vnd.ms-excel": FileKind.XLS,
    "text/csv": FileKind.CSV,
}
