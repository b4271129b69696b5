from datetime import date, datetime, timezone

import pytest
from jinja2 import Environment

from pydantic_models.data.analysis_result import AnalysisResult
from reports.modules import build_report_content, render_report_pdf, report_filename
from reports.modules.filters import FilterConfig, babel_date, babel_datetime, babel_decimal, register_filters


@pytest.fixture
def point_result() -> AnalysisResult:
    return AnalysisResult(
        total_hours=12.5,
        total_kilometers=1234.5,
        point_counts={f"PONTO {n}": n for n in range(1, 9)},
        timestamp=datetime(2024, 2, 1, 15, 30, tzinfo=timezone.utc),
    ).with_period("2024-01-01", None)


def test_point_report_content(point_result) -> None:
    content = build_report_content(
        point_result,
        "campo-largo",
        "ENGIE - CAMPO LARGO",
        legends={"PONTO 1": "PORTARIA PRINCIPAL"},
        generated_on=date(2024, 2, 2),
    )

    assert content.title == "ENGIE - CAMPO LARGO"
    assert content.subtitle == "Relatório de Análise de Dados"
    assert not content.archived
    assert content.info_lines == [
        "Data de Geração: 02/02/2024",
        "Análise Realizada em: 01/02/2024 12:30",
        "Período - Início: 01/01/2024",
        "Período - Fim: Não definida",
    ]
    assert content.summary_lines == [
        "Total de Horas: 12,50h",
        "Total de KM: 1.234,50 km",
        "Total de Pontos: 36",
    ]
    assert content.categories_title == "Contagem por Ponto"
    assert [c.label for c in content.categories] == [f"PONTO {n}" for n in range(1, 9)]
    assert content.categories[0].legend == "PORTARIA PRINCIPAL"
    assert content.categories[1].legend is None


def test_archived_route_report_content() -> None:
    result = AnalysisResult(total_hours=3, total_kilometers=40, point_counts={"ROTEIRO 1": 2})
    content = build_report_content(result, "gentio-do-ouro", "ENGIE - GENTIO DO OURO", month_label="Janeiro 2024")

    assert content.archived
    assert content.subtitle == "Janeiro 2024 - SOMENTE LEITURA"
    assert content.summary_lines == ["Duração de Horas: 3,00h", "KM Total: 40,00 km"]
    assert content.categories_title == "Informe o Roteiro"


def test_render_report_pdf(point_result) -> None:
    content = build_report_content(point_result, "campo-largo", "ENGIE - CAMPO LARGO")
    pdf = render_report_pdf(content)
    assert pdf.startswith(b"%PDF")


def test_render_long_category_list(point_result) -> None:
    content = build_report_content(point_result, "campo-largo", "ENGIE - CAMPO LARGO")
    many = content.model_copy(update={"categories": content.categories * 10})
    pdf = render_report_pdf(many)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > len(render_report_pdf(content))


def test_report_filename() -> None:
    assert report_filename("campo-largo", "Janeiro  2024") == "relatorio-campo-largo-Janeiro-2024.pdf"
    assert report_filename("umburanas", today=date(2024, 3, 5)) == "relatorio-umburanas-2024-03-05.pdf"


def test_filters() -> None:
    assert babel_decimal(1234.5) == "1.234,50"
    assert babel_decimal(None) == ""
    assert babel_date("2024-01-31") == "31/01/2024"
    assert babel_date("") == "Não definida"
    assert babel_date("ontem") == "Não definida"
    assert babel_datetime("sem data") == "Data inválida"

    env = Environment()
    register_filters(env, FilterConfig())
    rendered = env.from_string("{{ h | hours }} / {{ k | km }} / {{ d | date_br }}").render(
        h=2.5, k=10, d="2024-01-01"
    )
    assert rendered == "2,50h / 10,00 km / 01/01/2024"
