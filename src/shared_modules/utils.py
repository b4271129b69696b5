import math
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Any, Optional

from openpyxl.utils.datetime import to_excel

# Datums- und Dauerwerte, wie openpyxl/pandas sie aus Tabellenzellen liefern
TEMPORAL_TYPES: tuple[type, ...] = (datetime, date, time, timedelta)

PT_MONTH_NAMES: tuple[str, ...] = (
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
)


def safe_str(val) -> str:
    """
    Gibt immer einen String zurück, auch wenn val None oder numerisch ist.
    """
    return "" if val is None else str(val)


def is_number(value: Any) -> bool:
    """True für int/float, aber nicht für bool (bool ist in Python ein int)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_day_serial(value: Any) -> Optional[float]:
    """
    Rechnet native Tabellenwerte in die Excel-Seriennummer um (1.0 = ein Tag).
    Zahlen bleiben unverändert, alles andere ergibt None.
    Ganzzahlen ausserhalb des float-Bereichs ergeben ±math.inf.
    """
    if is_number(value):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, TEMPORAL_TYPES):
        return float(to_excel(value))
    return None


def current_month_key(now: Optional[datetime] = None) -> str:
    """Aktueller Monat als YYYY-MM."""
    return (now or datetime.now()).strftime("%Y-%m")


def month_display_name(month_key: str) -> str:
    """'2024-01' -> 'Janeiro 2024'."""
    parsed = datetime.strptime(month_key, "%Y-%m")
    return f"{PT_MONTH_NAMES[parsed.month - 1]} {parsed.year}"


def ensure_dir(path: Path) -> Path:
    """Erzeugt ein Verzeichnis (rekursiv), falls es fehlt, und gibt den Pfad zurück."""
    path.mkdir(parents=True, exist_ok=True)
    return path
