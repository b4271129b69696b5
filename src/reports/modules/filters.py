from datetime import date, datetime
from typing import Any, Optional

from babel.dates import format_date, format_datetime, get_timezone
from babel.numbers import format_decimal
from jinja2 import Environment, Undefined
from pydantic import BaseModel

NOT_SET = "Não definida"


class FilterConfig(BaseModel):
    """
    Pydantic-Modell für die Filter-Konfiguration.
    Sorgt für Typsicherheit und Validierung der Formatierungsoptionen.
    """
    locale: str = "pt_BR"
    timezone: str = "America/Bahia"
    numeric_format: str = "#,##0.00"
    date_format: str = "dd/MM/yyyy"
    datetime_format: str = "dd/MM/yyyy HH:mm"


def babel_decimal(value: Any, locale: str = "pt_BR", numeric_format: Optional[str] = "#,##0.00") -> str:
    """Zahl mit zwei Nachkommastellen im Format des Gebietsschemas."""
    if value is None or isinstance(value, Undefined):
        return ""
    return format_decimal(value, format=numeric_format, locale=locale)


def babel_date(value: Any, locale: str = "pt_BR", date_format: str = "dd/MM/yyyy") -> str:
    """
    Datum (date oder ISO-String YYYY-MM-DD) als dd/MM/yyyy.
    Leere oder ungültige Werte ergeben 'Não definida'.
    """
    if value is None or value == "" or isinstance(value, Undefined):
        return NOT_SET
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value[:10])
        except ValueError:
            return NOT_SET
    return format_date(value, format=date_format, locale=locale)


def babel_datetime(
    value: Any,
    locale: str = "pt_BR",
    timezone: str = "America/Bahia",
    datetime_format: str = "dd/MM/yyyy HH:mm",
) -> str:
    """Zeitstempel in der Zeitzone des Projekts."""
    if value is None or isinstance(value, Undefined):
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return "Data inválida"
    return format_datetime(value, format=datetime_format, tzinfo=get_timezone(timezone), locale=locale)


def register_filters(env: Environment, config: FilterConfig) -> None:
    """
    Registriert alle Babel-Filter im Jinja2-Environment.
    Erwartet ein Pydantic-Modell für die Konfiguration.
    """
    env.filters["hours"] = lambda v: f"{babel_decimal(v, config.locale, config.numeric_format)}h"
    env.filters["km"] = lambda v: f"{babel_decimal(v, config.locale, config.numeric_format)} km"
    env.filters["decimal"] = lambda v: babel_decimal(v, config.locale, config.numeric_format)
    env.filters["date_br"] = lambda v: babel_date(v, config.locale, config.date_format)
    env.filters["datetime_br"] = lambda v: babel_datetime(
        v, config.locale, config.timezone, config.datetime_format
    )
