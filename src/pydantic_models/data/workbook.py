from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class Sheet(BaseModel):
    """
    Ein Tabellenblatt als 2-D-Raster der Rohwerte.
    Zeile 0 wird von den Auswertungen als Kopfzeile gelesen, ein Schema gibt es nicht.
    Zellwerte bleiben typisiert: None (leer), str, int/float, bool oder
    date/time/datetime/timedelta (native Datums-/Dauerkodierung der Tabellenkalkulation).
    """
    name: str
    rows: List[List[Any]] = Field(default_factory=list)

    @property
    def header(self) -> List[Any]:
        return self.rows[0] if self.rows else []

    @property
    def data_rows(self) -> List[List[Any]]:
        return self.rows[1:]

    def cell(self, row: List[Any], col_idx: int) -> Any:
        """Liefert den Wert in Spalte col_idx; kurze Zeilen ergeben None."""
        return row[col_idx] if col_idx < len(row) else None


class Workbook(BaseModel):
    """
    Geordnete Liste der Tabellenblätter einer hochgeladenen Datei.
    Reihenfolge der Blätter, Zeilen und Spalten entspricht der Quelldatei.
    """
    sheets: List[Sheet] = Field(default_factory=list)

    @property
    def first_sheet(self) -> Optional[Sheet]:
        return self.sheets[0] if self.sheets else None

    @property
    def sheet_names(self) -> List[str]:
        return [sheet.name for sheet in self.sheets]
