"""
PDF-Bericht eines Analyseergebnisses (aktuell oder archiviert).

build_report_content() stellt die Texte zusammen, render_report_pdf() zeichnet sie
mit reportlab auf A4. Alle Positionen sind in mm ab der oberen linken Ecke angegeben.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from io import BytesIO
from typing import Dict, List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, Field
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from pydantic_models.config.report_config import ReportConfig
from pydantic_models.data.analysis_result import AnalysisResult
from spreadsheet_analysis.modules.category_counter import ROUTE_SCHEMA, schema_for_project

from .filters import babel_date, babel_datetime, babel_decimal

MARGIN = 20
HEADER_BLUE = (59 / 255, 130 / 255, 246 / 255)
GREY = (100 / 255, 100 / 255, 100 / 255)


class CategoryLine(BaseModel):
    label: str
    count: int
    legend: Optional[str] = None


class ReportContent(BaseModel):
    title: str
    contract_text: str
    subtitle: str
    archived: bool = False
    info_lines: List[str] = Field(default_factory=list)
    summary_lines: List[str] = Field(default_factory=list)
    categories_title: str
    categories: List[CategoryLine] = Field(default_factory=list)
    footer_lines: List[str] = Field(default_factory=list)


def build_report_content(
    result: AnalysisResult,
    project_id: str,
    project_name: str,
    legends: Optional[Dict[str, str]] = None,
    month_label: Optional[str] = None,
    config: Optional[ReportConfig] = None,
    generated_on: Optional[date] = None,
) -> ReportContent:
    """
    Texte des Berichts. Mit month_label handelt es sich um einen archivierten Monat (nur lesbar).
    Die Kategorien erscheinen in der Reihenfolge des Ergebnisses, jeweils mit Legende, falls vorhanden.
    """
    config = config or ReportConfig()
    legends = legends or {}
    is_routes = schema_for_project(project_id) == ROUTE_SCHEMA

    def dec(value: float) -> str:
        return babel_decimal(value, config.locale, config.numeric_format)

    info_lines = [
        f"Data de Geração: {babel_date(generated_on or date.today(), config.locale)}",
        f"Análise Realizada em: {babel_datetime(result.timestamp, config.locale, config.timezone)}",
        f"Período - Início: {babel_date(result.start_date, config.locale)}",
        f"Período - Fim: {babel_date(result.end_date, config.locale)}",
    ]
    summary_lines = [
        f"{'Duração de Horas' if is_routes else 'Total de Horas'}: {dec(result.total_hours)}h",
        f"{'KM Total' if is_routes else 'Total de KM'}: {dec(result.total_kilometers)} km",
    ]
    if not is_routes:
        summary_lines.append(f"Total de Pontos: {result.total_points}")

    return ReportContent(
        title=project_name,
        contract_text=config.contract_text,
        subtitle=f"{month_label} - SOMENTE LEITURA" if month_label else "Relatório de Análise de Dados",
        archived=bool(month_label),
        info_lines=info_lines,
        summary_lines=summary_lines,
        categories_title="Informe o Roteiro" if is_routes else "Contagem por Ponto",
        categories=[
            CategoryLine(label=label, count=count, legend=legends.get(label))
            for label, count in result.point_counts.items()
        ],
        footer_lines=list(config.footer_lines),
    )


class _PageWriter:
    """Kleiner Cursor über dem reportlab-Canvas, y in mm von oben."""

    def __init__(self, c: canvas.Canvas):
        self.c = c
        self.width, self.height = A4

    def _y(self, y_mm: float) -> float:
        return self.height - y_mm * mm

    def set_font(self, size: int, bold: bool = False) -> None:
        self.c.setFont("Helvetica-Bold" if bold else "Helvetica", size)

    def set_color(self, rgb: Tuple[float, float, float]) -> None:
        self.c.setFillColorRGB(*rgb)

    def text(self, x_mm: float, y_mm: float, value: str) -> None:
        self.c.drawString(x_mm * mm, self._y(y_mm), value)

    def centered(self, y_mm: float, value: str) -> None:
        self.c.drawCentredString(self.width / 2, self._y(y_mm), value)

    @property
    def page_height_mm(self) -> float:
        return self.height / mm


def _draw_header(page: _PageWriter, content: ReportContent) -> None:
    page.set_color(HEADER_BLUE)
    page.c.rect(0, page._y(50), page.width, 50 * mm, stroke=0, fill=1)
    page.set_color((1, 1, 1))
    page.set_font(20, bold=True)
    page.centered(18, content.title)
    page.set_font(10)
    page.centered(26, content.contract_text)
    page.set_font(12)
    page.centered(35, content.subtitle)
    if content.archived:
        page.set_font(10)
        page.centered(43, "ARQUIVO ARQUIVADO")
    page.set_color((0, 0, 0))


def _draw_footer(page: _PageWriter, content: ReportContent) -> None:
    page.set_font(8)
    page.set_color(GREY)
    footer_y = page.page_height_mm - 15
    for offset, line in enumerate(content.footer_lines):
        page.centered(footer_y + offset * 4, line)
    page.set_color((0, 0, 0))


def render_report_pdf(content: ReportContent) -> bytes:
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(f"{content.title} - {content.subtitle}")
    page = _PageWriter(c)

    _draw_header(page, content)
    y = 65

    page.set_font(14, bold=True)
    page.text(MARGIN, y, "Informações do Relatório")
    y += 10
    page.set_font(10)
    for line in content.info_lines:
        page.text(MARGIN, y, line)
        y += 6
    y += 9

    page.set_font(14, bold=True)
    page.text(MARGIN, y, "Resumo")
    y += 10
    page.set_font(11)
    for line in content.summary_lines:
        page.text(MARGIN, y, line)
        y += 7
    y += 8 if len(content.summary_lines) > 2 else 3

    page.set_font(14, bold=True)
    page.text(MARGIN, y, content.categories_title)
    y += 10
    page.set_font(10)

    for entry in content.categories:
        if y > page.page_height_mm - 30:
            _draw_footer(page, content)
            c.showPage()
            page.set_font(10)
            y = 20
        page.text(MARGIN, y, f"{entry.label}: {entry.count}")
        y += 6
        if entry.legend:
            page.set_font(8)
            page.set_color(GREY)
            page.text(MARGIN + 5, y, entry.legend)
            y += 5
            page.set_font(10)
            page.set_color((0, 0, 0))

    _draw_footer(page, content)
    c.showPage()
    c.save()
    logger.debug(f"PDF-Bericht '{content.title}' erzeugt ({content.subtitle}).")
    return buffer.getvalue()


def report_filename(project_id: str, month_label: Optional[str] = None, today: Optional[date] = None) -> str:
    """relatorio-<projeto>-<Monat mit Bindestrichen>.pdf bzw. mit dem heutigen Datum."""
    if month_label:
        slug = re.sub(r"\s+", "-", month_label.strip())
        return f"relatorio-{project_id}-{slug}.pdf"
    return f"relatorio-{project_id}-{(today or datetime.now().date()).isoformat()}.pdf"
