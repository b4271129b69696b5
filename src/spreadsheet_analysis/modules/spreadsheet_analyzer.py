"""
Auswertung einer Planilha: Stunden, Kilometer und Pontos/Roteiros.

Die drei Durchläufe sind unabhängig voneinander und laufen immer vollständig.
Fehler gibt es nur, wenn die Datei nicht gelesen oder nicht als Tabelle
dekodiert werden kann.
"""
from pathlib import Path
from typing import Optional

from loguru import logger

from pydantic_models.data.analysis_result import AnalysisResult
from pydantic_models.data.workbook import Workbook
from shared_modules.errors import FileKind

from .category_counter import count_categories, schema_for_project
from .distance_aggregator import sum_distances
from .duration_aggregator import sum_durations
from .workbook_reader import load_workbook_bytes, read_upload


def analyze_workbook(workbook: Workbook, project_id: str) -> AnalysisResult:
    result = AnalysisResult(
        total_hours=sum_durations(workbook),
        total_kilometers=sum_distances(workbook),
        point_counts=count_categories(workbook, schema_for_project(project_id)),
    )
    logger.info(
        f"Analyse {project_id}: {result.total_hours:.2f} h, "
        f"{result.total_kilometers:.2f} km, {result.total_points} Treffer"
    )
    return result


def analyze_bytes(data: bytes, kind: FileKind, project_id: str) -> AnalysisResult:
    return analyze_workbook(load_workbook_bytes(data, kind), project_id)


def analyze_file(path: Path, project_id: str, kind: Optional[FileKind] = None) -> AnalysisResult:
    """
    Liest und analysiert eine Datei. Ohne kind wird die Dateiart aus der Endung bestimmt
    (UnsupportedFormatError bei fremder Endung).
    """
    path = Path(path)
    kind = kind or FileKind.from_upload(path.name)
    logger.info(f"Analysiere {path.name} ({kind.value}) für Projekt {project_id}")
    return analyze_bytes(read_upload(path), kind, project_id)
