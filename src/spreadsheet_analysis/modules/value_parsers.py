"""
Umrechnung einzelner Zellwerte in Stunden bzw. Kilometer.

Nicht auswertbare Werte sind kein Fehler: Dauer ergibt 0.0, Distanz ergibt None
(die Zeile wird verworfen).
"""
import math
import re
from typing import Any, Optional

from shared_modules.utils import safe_str, to_day_serial

# H:MM oder H:MM:SS, irgendwo im Text
_CLOCK_RE = re.compile(r"(\d+):(\d+)(?::(\d+))?", re.ASCII)
# erster Block aus Ziffern, Komma und Punkt
_NUMBER_RUN_RE = re.compile(r"[\d.,]+", re.ASCII)
# alles ausser Ziffern, Komma, Punkt und Minus
_DISTANCE_NOISE_RE = re.compile(r"[^\d.,\-]", re.ASCII)
# gültiger Zahlenanfang; der Rest des Strings wird ignoriert ("1.234.56" -> 1.234)
_LEADING_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)", re.ASCII)


def parse_leading_float(text: str) -> Optional[float]:
    match = _LEADING_FLOAT_RE.match(text.strip())
    return float(match.group()) if match else None


def parse_hours(value: Any) -> float:
    """
    Dauer einer Zelle in Stunden.

    1. Native Zahl oder Datums-/Dauerwert: Tagesbruchteil * 24 (0.5 -> 12.0).
    2. Text mit Uhrzeitmuster H:MM[:SS]: h + m/60 + s/3600.
    3. Erster Zahlenblock im Text, Komma als Dezimaltrenner.
    4. Sonst 0.0.
    Nicht endliche Ergebnisse (z.B. eine Ziffernfolge jenseits des float-Bereichs) zählen 0.0.
    """
    hours = _raw_hours(value)
    return hours if math.isfinite(hours) else 0.0


def _raw_hours(value: Any) -> float:
    day_fraction = to_day_serial(value)
    if day_fraction is not None:
        return day_fraction * 24

    text = safe_str(value)
    clock = _CLOCK_RE.search(text)
    if clock:
        hours, minutes, seconds = clock.groups()
        return int(hours) + int(minutes) / 60 + int(seconds or 0) / 3600

    number_run = _NUMBER_RUN_RE.search(text)
    if number_run:
        number = parse_leading_float(number_run.group().replace(",", ".", 1))
        if number is not None:
            return number

    return 0.0


def clean_distance_text(value: Any) -> str:
    """'12,5 km' -> '12.5'. Nur das erste Komma wird zum Punkt."""
    return _DISTANCE_NOISE_RE.sub("", safe_str(value).strip()).replace(",", ".", 1)


def parse_kilometers(value: Any) -> Optional[float]:
    """
    Distanz einer Zelle in km, oder None, wenn der Wert nicht lesbar oder nicht positiv ist.
    Eine echte 0 ist davon nicht zu unterscheiden und wird ebenfalls verworfen.
    """
    number = to_day_serial(value)
    if number is None:
        number = parse_leading_float(clean_distance_text(value))
    if number is None or not math.isfinite(number) or number <= 0:
        return None
    return number
