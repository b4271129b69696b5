import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from loguru import logger

from pydantic_models.data.analysis_result import AnalysisResult


class AnalysisHistory:
    """
    Verlauf der letzten Einzelanalysen (noch nicht archiviert).
    Es werden nur die letzten `limit` Ergebnisse aufbewahrt.
    """

    def __init__(self, db_path: Path, limit: int = 10):
        self.db_path = Path(db_path)
        self.limit = limit
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS analysis_history (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    data TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )

    def save_analysis(self, result: AnalysisResult) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT INTO analysis_history (data, created_at) VALUES (?, ?)",
                (result.to_json(), datetime.now(timezone.utc).isoformat()),
            )
            conn.execute(
                """
                DELETE FROM analysis_history WHERE id NOT IN (
                    SELECT id FROM analysis_history ORDER BY id DESC LIMIT ?
                )
                """,
                (self.limit,),
            )
        logger.debug("Analyse im Verlauf gespeichert.")

    def history(self) -> List[AnalysisResult]:
        """Gespeicherte Analysen, älteste zuerst."""
        with sqlite3.connect(self.db_path) as conn:
            rows = conn.execute("SELECT data FROM analysis_history ORDER BY id").fetchall()
        return [AnalysisResult.from_json(data) for (data,) in rows]
