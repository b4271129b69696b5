from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from pydantic_models.data.analysis_result import AnalysisResult


class SavedMonth(BaseModel):
    """
    Archivierter Monat eines Projekts (nur lesbar).
    month_year im Format YYYY-MM, display_name frei wählbar (z.B. "Janeiro 2024").
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    project_id: str = Field(alias="projectId")
    month_year: str = Field(alias="monthYear")
    display_name: str = Field(alias="displayName")
    data: AnalysisResult
    saved_at: datetime = Field(alias="savedAt")
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
