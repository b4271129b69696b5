from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisResult(BaseModel):
    """
    Ergebnis einer Planilha-Analyse.

    - total_hours: Summe aller Dauerwerte in Stunden.
    - total_kilometers: Summe aller positiven Distanzwerte in km.
    - point_counts: Kategorie -> Anzahl, Schlüssel fix je Projekttyp, Reihenfolge = Kategorienummer.
    - timestamp: Zeitpunkt der Erstellung (UTC), wird nie verändert.
    - start_date / end_date: vom Aufrufer gesetzter Zeitraum, nicht berechnet.

    Das Modell ist eingefroren; einen Zeitraum setzt man über with_period().
    Eingefroren sind nur die Felder; point_counts ist weiterhin ein dict. Es wird beim
    Erzeugen und in with_period() kopiert, zwei Ergebnisse teilen also nie dieselben Zähler.
    Serialisiert wird mit camelCase-Schlüsseln (totalHours, pointCounts, ...),
    damit das Archivformat dem bestehenden JSON entspricht.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_hours: float = Field(0.0, alias="totalHours")
    total_kilometers: float = Field(0.0, alias="totalKilometers")
    point_counts: Dict[str, int] = Field(default_factory=dict, alias="pointCounts")
    timestamp: datetime = Field(default_factory=_utc_now)
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")

    def with_period(self, start_date: Optional[str], end_date: Optional[str]) -> "AnalysisResult":
        """Kopie mit gesetztem Zeitraum; leere Strings gelten als nicht gesetzt."""
        return self.model_copy(
            update={"start_date": start_date or None, "end_date": end_date or None}, deep=True
        )

    @property
    def total_points(self) -> int:
        return sum(self.point_counts.values())

    @property
    def total_days(self) -> float:
        return self.total_hours / 24

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str) -> "AnalysisResult":
        return cls.model_validate_json(raw)
