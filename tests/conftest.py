"""Pytest-Fixtures: Planilhas im Speicher und eine Config im temporären Projektverzeichnis."""
from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Dict, List

import pytest
import yaml
from openpyxl import Workbook as XlsxWorkbook

from pydantic_models.data.workbook import Sheet, Workbook
from shared_modules.config import Config


def build_xlsx(sheets: Dict[str, List[List[Any]]]) -> bytes:
    wb = XlsxWorkbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def workbook_of(*sheets: List[List[Any]]) -> Workbook:
    return Workbook(sheets=[Sheet(name=f"Aba{idx}", rows=rows) for idx, rows in enumerate(sheets, start=1)])


@pytest.fixture
def xlsx_factory():
    return build_xlsx


@pytest.fixture
def field_report_xlsx() -> bytes:
    """Typischer Export: Fahrten auf Blatt 1, weitere km auf Blatt 2."""
    return build_xlsx(
        {
            "Viagens": [
                ["Data", "Motorista", "Duração", "KM Rodado", "Observação"],
                ["2024-01-02", "João", "2:30", "10,5 km", "PONTO 1 e PONTO 3"],
                ["2024-01-03", "Maria", 0.5, 20, "ponto 1"],
                ["2024-01-04", "Ana", None, "abc", "PONTO1"],
                ["2024-01-05", "José", "1:15:30", -3, "PONTO 8"],
            ],
            "Extras": [
                ["Veículo", "KM Total"],
                ["Hilux", 4.5],
                ["Strada", ""],
            ],
        }
    )


@pytest.fixture
def config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Config:
    for name in ("FERNET_KEY", "ADMIN_PASSWORD_ENC", "CLIENTE_PASSWORD", "CLIENTE_PASSWORD_ENC"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ADMIN_PASSWORD", "admin-secret")
    monkeypatch.setenv("FLASK_SECRET_KEY", "test-secret")
    config_path = tmp_path / "analise_config.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "logging": {"log_file": None, "log_level": "DEBUG"},
                "structure": {"prj_root": str(tmp_path)},
                "database": {"sqlite_db_name": "test.sqlite3", "history_limit": 3},
                "auth": {
                    "seed_users": [
                        {"username": "admin", "role": "admin", "password_env": "ADMIN_PASSWORD"},
                        {"username": "cliente", "role": "viewer", "password_env": "CLIENTE_PASSWORD"},
                    ]
                },
            }
        ),
        encoding="utf-8",
    )
    Config._instance = None
    return Config(config_path)
