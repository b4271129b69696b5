from .analysis_history import AnalysisHistory
from .month_archive import MonthArchive
