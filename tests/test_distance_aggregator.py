import pytest

from spreadsheet_analysis.modules.distance_aggregator import (
    find_distance_column,
    is_distance_header,
    sum_distances,
    sum_sheet_distances,
)

from .conftest import workbook_of


@pytest.mark.parametrize(
    "header",
    ["KM", " km ", "KM Rodado", "Total KM Rodado no mês", "km total", "Quilômetro Percorrido", "Kilometro"],
)
def test_distance_headers_that_match(header) -> None:
    assert is_distance_header(header)


@pytest.mark.parametrize("header", ["Quilometro", "KMs", "Placa", None, "", "Distância"])
def test_distance_headers_that_do_not_match(header) -> None:
    assert not is_distance_header(header)


def test_find_distance_column_takes_first_match() -> None:
    assert find_distance_column(["Placa", "KM Total", "KM Rodado"]) == 1


def test_fallback_header_example() -> None:
    workbook = workbook_of([["Quilômetro Percorrido"], ["10,5"], ["abc"], ["-3"], ["20"]])
    assert sum_sheet_distances(workbook.sheets[0]) == pytest.approx(30.5)


def test_sum_distances_over_all_sheets() -> None:
    workbook = workbook_of(
        [["Placa", "KM Rodado"], ["ABC-1234", 12.5], ["DEF-5678", "7,5 km"]],
        [["Sem distância"], [100]],
        [["km"], [None], [""], [5]],
    )
    assert sum_distances(workbook) == pytest.approx(25.0)


def test_zero_and_negative_values_are_dropped() -> None:
    workbook = workbook_of([["KM"], [0], [-10], ["0,0"]])
    assert sum_distances(workbook) == 0.0


def test_empty_workbook_sums_to_zero() -> None:
    assert sum_distances(workbook_of([])) == 0.0
