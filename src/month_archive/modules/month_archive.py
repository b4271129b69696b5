import re
import sqlite3
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import pandas as pd
from loguru import logger
from pydantic import ValidationError

from pydantic_models.data.analysis_result import AnalysisResult
from pydantic_models.data.saved_month import SavedMonth
from shared_modules.utils import current_month_key, month_display_name

_MONTH_KEY_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class MonthArchive:
    """
    Archiv der gespeicherten Monate je Projekt in der SQLite-DB.
    Ein archivierter Monat wird nur noch gelesen oder gelöscht, nie verändert.
    """

    _CREATE_SQL = """
    CREATE TABLE IF NOT EXISTS saved_months (
        id TEXT PRIMARY KEY,
        project_id TEXT NOT NULL,
        month_year TEXT NOT NULL,
        display_name TEXT NOT NULL,
        data TEXT NOT NULL,
        saved_at TEXT NOT NULL,
        start_date TEXT,
        end_date TEXT
    )
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        with self.get_db_connection() as conn:
            conn.execute(self._CREATE_SQL)

    def get_db_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    @staticmethod
    def default_display_name(month_year: Optional[str] = None) -> str:
        """Vorschlag für den Anzeigenamen, z.B. "Janeiro 2024"."""
        return month_display_name(month_year or current_month_key())

    def _new_id(self, conn: sqlite3.Connection, project_id: str, month_year: str) -> str:
        stamp = int(time.time() * 1000)
        while True:
            candidate = f"{project_id}-{month_year}-{stamp}"
            exists = conn.execute("SELECT 1 FROM saved_months WHERE id = ?", (candidate,)).fetchone()
            if not exists:
                return candidate
            stamp += 1

    def save_month(
        self,
        project_id: str,
        result: AnalysisResult,
        display_name: str,
        month_year: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> str:
        """
        Archiviert ein Analyseergebnis und gibt die neue ID zurück.
        month_year fehlt -> aktueller Monat. Ohne Zeitraum gilt der Zeitraum des Ergebnisses.
        """
        name = (display_name or "").strip()
        if not name:
            logger.error("Monat kann ohne Namen nicht gespeichert werden.")
            raise ValueError("Digite um nome para o mês")
        month_year = month_year or current_month_key()
        if not _MONTH_KEY_RE.match(month_year):
            logger.error(f"Ungültiger Monat '{month_year}', erwartet YYYY-MM.")
            raise ValueError(f"Ungültiger Monat '{month_year}', erwartet YYYY-MM.")

        start_date = start_date or result.start_date
        end_date = end_date or result.end_date
        archived = result.with_period(start_date, end_date)
        saved_at = datetime.now(timezone.utc).isoformat()

        with self.get_db_connection() as conn:
            month_id = self._new_id(conn, project_id, month_year)
            conn.execute(
                """
                INSERT INTO saved_months (
                    id, project_id, month_year, display_name, data, saved_at, start_date, end_date
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    month_id,
                    project_id,
                    month_year,
                    name,
                    archived.to_json(),
                    saved_at,
                    archived.start_date,
                    archived.end_date,
                ),
            )
        logger.info(f"Monat '{name}' ({month_year}) für {project_id} gespeichert: {month_id}")
        return month_id

    @staticmethod
    def _to_saved_month(record: dict) -> SavedMonth:
        return SavedMonth(
            id=record["id"],
            project_id=record["project_id"],
            month_year=record["month_year"],
            display_name=record["display_name"],
            data=AnalysisResult.from_json(record["data"]),
            saved_at=record["saved_at"],
            start_date=record.get("start_date"),
            end_date=record.get("end_date"),
        )

    def list_months(self, project_id: str) -> List[SavedMonth]:
        """Alle archivierten Monate eines Projekts, neueste zuerst."""
        sql = "SELECT * FROM saved_months WHERE project_id = ? ORDER BY saved_at DESC"
        with self.get_db_connection() as conn:
            df = pd.read_sql_query(sql, conn, params=(project_id,))
        df = df.astype(object).where(pd.notna(df), None)

        months: List[SavedMonth] = []
        for idx, row in df.iterrows():
            try:
                months.append(self._to_saved_month(row.to_dict()))
            except ValidationError as e:
                logger.error(f"Ungültiger Archiveintrag in Zeile {idx}: {e}")
        return months

    def get_month(self, month_id: str) -> SavedMonth:
        with self.get_db_connection() as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute("SELECT * FROM saved_months WHERE id = ?", (month_id,)).fetchone()
        if row is None:
            logger.error(f"Archivierter Monat {month_id} nicht gefunden.")
            raise KeyError(month_id)
        return self._to_saved_month(dict(row))

    def delete_month(self, month_id: str) -> bool:
        """Löscht einen archivierten Monat; False, wenn die ID unbekannt ist."""
        with self.get_db_connection() as conn:
            cur = conn.execute("DELETE FROM saved_months WHERE id = ?", (month_id,))
            deleted = cur.rowcount > 0
        if deleted:
            logger.info(f"Archivierter Monat {month_id} gelöscht.")
        else:
            logger.warning(f"Archivierter Monat {month_id} war nicht vorhanden.")
        return deleted
