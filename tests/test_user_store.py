import sqlite3

import pytest

from user_management.modules import SeedUser, UserStore

SEEDS = [
    SeedUser(username="admin", password="admin-secret", role="admin"),
    SeedUser(username="cliente", password="cliente-secret", role="viewer"),
]


@pytest.fixture
def store(tmp_path) -> UserStore:
    return UserStore(tmp_path / "users.sqlite3")


def test_seed_runs_only_on_empty_table(store) -> None:
    assert store.seed_default_users(SEEDS) == 2
    assert store.seed_default_users(SEEDS) == 0
    assert [u.id for u in store.list_users()] == ["admin-default", "cliente-default"]


def test_authenticate(store) -> None:
    store.seed_default_users(SEEDS)

    user = store.authenticate("ADMIN", "admin-secret")
    assert user is not None and user.is_admin
    assert store.authenticate("admin", "wrong") is None
    assert store.authenticate("ninguem", "admin-secret") is None
    assert not store.authenticate("cliente", "cliente-secret").is_admin


def test_password_is_stored_hashed(store, tmp_path) -> None:
    store.seed_default_users(SEEDS)
    with sqlite3.connect(tmp_path / "users.sqlite3") as conn:
        (stored,) = conn.execute("SELECT password_hash FROM users WHERE username = 'admin'").fetchone()
    assert stored != "admin-secret"


def test_create_user(store) -> None:
    user = store.create_user(" gestor ", "senha", "admin")
    assert user.username == "gestor"
    assert user.id.startswith("user-")
    assert store.get_user(user.id) == user


@pytest.mark.parametrize(
    "username, password, role, message",
    [
        ("", "senha", "viewer", "obrigatórios"),
        ("novo", "", "viewer", "obrigatórios"),
        ("novo", "senha", "root", "Rolle"),
    ],
)
def test_create_user_validation(store, username, password, role, message) -> None:
    with pytest.raises(ValueError, match=message):
        store.create_user(username, password, role)


def test_duplicate_username_is_case_insensitive(store) -> None:
    store.create_user("Maria", "senha", "viewer")
    with pytest.raises(ValueError, match="Usuário já existe"):
        store.create_user("maria", "outra", "viewer")


def test_delete_user(store) -> None:
    store.seed_default_users(SEEDS)

    with pytest.raises(PermissionError):
        store.delete_user("admin-default", acting_user_id="admin-default")

    store.delete_user("cliente-default", acting_user_id="admin-default")
    assert store.get_user("cliente-default") is None

    with pytest.raises(KeyError):
        store.delete_user("cliente-default", acting_user_id="admin-default")
