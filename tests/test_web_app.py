import io

import pytest

from gui.app import create_app
from month_archive.modules import AnalysisHistory, MonthArchive
from pydantic_models.data.analysis_result import AnalysisResult
from user_management.modules import UserStore


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def viewer(config, app):
    UserStore(config.db_path).create_user("visitante", "ver123", "viewer")
    return "visitante", "ver123"


def login(client, username="admin", password="admin-secret"):
    return client.post("/", data={"username": username, "password": password}, follow_redirects=True)


def upload(client, data: bytes, filename: str = "viagens.xlsx", project_id: str = "campo-largo"):
    return client.post(
        f"/projeto/{project_id}/upload",
        data={"file": (io.BytesIO(data), filename), "start_date": "2024-01-01", "end_date": "2024-01-31"},
        content_type="multipart/form-data",
        follow_redirects=True,
    )


def test_seed_users_are_created_from_environment(config, app) -> None:
    usernames = [u.username for u in UserStore(config.db_path).list_users()]
    assert usernames == ["admin"]


def test_login_required(client) -> None:
    response = client.get("/projetos")
    assert response.status_code == 302
    assert "/?next=" in response.headers["Location"]


def test_wrong_password(client) -> None:
    response = login(client, password="errada")
    assert "Usuário ou senha incorretos" in response.get_data(as_text=True)


def test_admin_upload_save_and_export(client, config, field_report_xlsx) -> None:
    assert "ENGIE - CAMPO LARGO" in login(client).get_data(as_text=True)

    page = upload(client, field_report_xlsx).get_data(as_text=True)
    assert "Planilha analisada com sucesso!" in page
    assert "PONTO 1" in page
    assert "35,00 km" in page
    assert "01/01/2024" in page
    assert len(AnalysisHistory(config.db_path).history()) == 1

    page = client.post(
        "/projeto/campo-largo/meses",
        data={"display_name": "Janeiro 2024", "start_date": "2024-01-01", "end_date": "2024-01-31"},
        follow_redirects=True,
    ).get_data(as_text=True)
    assert "salvo com sucesso!" in page
    months = MonthArchive(config.db_path).list_months("campo-largo")
    assert [m.display_name for m in months] == ["Janeiro 2024"]

    page = client.get(f"/projeto/campo-largo/meses/{months[0].id}").get_data(as_text=True)
    assert "Janeiro 2024 - SOMENTE LEITURA" in page

    response = client.get("/projeto/campo-largo/relatorio")
    assert response.mimetype == "application/pdf"
    assert response.data.startswith(b"%PDF")

    response = client.get(f"/projeto/campo-largo/relatorio?mes={months[0].id}")
    assert "relatorio-campo-largo-Janeiro-2024.pdf" in response.headers["Content-Disposition"]

    client.post(f"/projeto/campo-largo/meses/{months[0].id}/excluir", follow_redirects=True)
    assert MonthArchive(config.db_path).list_months("campo-largo") == []


def test_bad_upload_shows_error(client) -> None:
    login(client)
    page = upload(client, b"nada", filename="dados.pdf").get_data(as_text=True)
    assert "Tente novamente ou verifique o formato do arquivo." in page

    page = upload(client, b"nada", filename="dados.xlsx").get_data(as_text=True)
    assert "Erro ao processar planilha" in page


def test_save_month_without_result(client) -> None:
    login(client)
    page = client.post(
        "/projeto/umburanas/meses", data={"display_name": "Março"}, follow_redirects=True
    ).get_data(as_text=True)
    assert "Nenhum dado para salvar" in page


def test_viewer_is_read_only(client, config, viewer, field_report_xlsx) -> None:
    login(client, *viewer)

    page = upload(client, field_report_xlsx).get_data(as_text=True)
    assert "Você não tem permissão para fazer upload de arquivos" in page
    assert AnalysisHistory(config.db_path).history() == []

    page = client.get("/projeto/campo-largo/relatorio", follow_redirects=True).get_data(as_text=True)
    assert "Você não tem permissão para exportar PDF" in page

    page = client.get("/painel", follow_redirects=True).get_data(as_text=True)
    assert "Apenas administradores podem acessar o painel" in page


def test_control_panel(client, config) -> None:
    login(client)

    page = client.post(
        "/painel", data={"username": "cliente2", "password": "abc", "role": "viewer"}, follow_redirects=True
    ).get_data(as_text=True)
    assert "Usuário criado com sucesso" in page
    assert "cliente2" in page

    page = client.post("/painel/admin-default/excluir", follow_redirects=True).get_data(as_text=True)
    assert "Você não pode deletar seu próprio usuário" in page

    store = UserStore(config.db_path)
    new_id = next(u.id for u in store.list_users() if u.username == "cliente2")
    client.post(f"/painel/{new_id}/excluir", follow_redirects=True)
    assert store.get_user(new_id) is None


def test_archived_month_of_other_project_is_not_found(client, config) -> None:
    archive = MonthArchive(config.db_path)
    month_id = archive.save_month(
        "umburanas", AnalysisResult(point_counts={"PONTO 1": 4}), "Janeiro 2024", month_year="2024-01"
    )
    login(client)

    page = client.get(f"/projeto/campo-largo/meses/{month_id}", follow_redirects=True).get_data(as_text=True)
    assert "Mês não encontrado" in page
    assert "SOMENTE LEITURA" not in page

    response = client.get(f"/projeto/campo-largo/relatorio?mes={month_id}", follow_redirects=True)
    assert response.mimetype == "text/html"
    assert "Mês não encontrado" in response.get_data(as_text=True)

    client.post(f"/projeto/campo-largo/meses/{month_id}/excluir", follow_redirects=True)
    assert archive.get_month(month_id).project_id == "umburanas"

    page = client.get(f"/projeto/umburanas/meses/{month_id}").get_data(as_text=True)
    assert "Janeiro 2024 - SOMENTE LEITURA" in page
