"""
Benutzerverwaltung in der SQLite-DB.

Passwörter werden nur als werkzeug-Hash gespeichert. Die Standardbenutzer werden
einmalig über seed_default_users() angelegt, und zwar nur bei leerer Tabelle.
"""
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from loguru import logger
from pydantic import BaseModel
from werkzeug.security import check_password_hash, generate_password_hash

from pydantic_models.data.user import Role, User


class SeedUser(BaseModel):
    username: str
    password: str
    role: Role


class UserStore:
    _CREATE_SQL = """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        username TEXT NOT NULL,
        password_hash TEXT NOT NULL,
        role TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        with self._connect() as conn:
            conn.execute(self._CREATE_SQL)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _to_user(row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            role=row["role"],
            created_at=row["created_at"],
        )

    def _find_row(self, conn: sqlite3.Connection, username: str) -> Optional[sqlite3.Row]:
        return conn.execute(
            "SELECT * FROM users WHERE lower(username) = lower(?)", (username.strip(),)
        ).fetchone()

    def _insert(self, conn: sqlite3.Connection, user_id: str, username: str, password: str, role: str) -> None:
        conn.execute(
            "INSERT INTO users (id, username, password_hash, role, created_at) VALUES (?, ?, ?, ?, ?)",
            (
                user_id,
                username,
                generate_password_hash(password),
                role,
                datetime.now(timezone.utc).isoformat(),
            ),
        )

    def seed_default_users(self, seeds: Iterable[SeedUser]) -> int:
        """
        Legt die Standardbenutzer an, falls noch gar kein Benutzer existiert.
        Gibt die Anzahl der angelegten Benutzer zurück.
        """
        with self._connect() as conn:
            (count,) = conn.execute("SELECT COUNT(*) FROM users").fetchone()
            if count:
                logger.debug(f"{count} Benutzer vorhanden, kein Seed nötig.")
                return 0
            created = 0
            for seed in seeds:
                self._insert(conn, f"{seed.username}-default", seed.username, seed.password, seed.role)
                created += 1
        logger.info(f"{created} Standardbenutzer angelegt.")
        return created

    def create_user(self, username: str, password: str, role: Role) -> User:
        username = username.strip()
        if not username or not password:
            logger.error("Benutzername und Passwort sind Pflicht.")
            raise ValueError("Usuário e senha são obrigatórios")
        if role not in ("admin", "viewer"):
            logger.error(f"Unbekannte Rolle '{role}'.")
            raise ValueError(f"Unbekannte Rolle '{role}'.")
        with self._connect() as conn:
            if self._find_row(conn, username) is not None:
                logger.warning(f"Benutzer '{username}' existiert bereits.")
                raise ValueError("Usuário já existe")
            user_id = f"user-{uuid.uuid4().hex[:12]}"
            self._insert(conn, user_id, username, password, role)
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        logger.info(f"Benutzer '{username}' ({role}) angelegt.")
        return self._to_user(row)

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Benutzername ohne Beachtung der Gross-/Kleinschreibung, Passwort exakt."""
        with self._connect() as conn:
            row = self._find_row(conn, username or "")
        if row is None or not check_password_hash(row["password_hash"], password or ""):
            logger.warning(f"Anmeldung für '{username}' fehlgeschlagen.")
            return None
        return self._to_user(row)

    def get_user(self, user_id: str) -> Optional[User]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return self._to_user(row) if row else None

    def list_users(self) -> List[User]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY created_at, username").fetchall()
        return [self._to_user(row) for row in rows]

    def delete_user(self, user_id: str, acting_user_id: Optional[str] = None) -> None:
        if acting_user_id is not None and user_id == acting_user_id:
            logger.error("Benutzer versucht, sich selbst zu löschen.")
            raise PermissionError("Você não pode deletar seu próprio usuário")
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        if cur.rowcount == 0:
            logger.error(f"Benutzer {user_id} nicht gefunden.")
            raise KeyError(user_id)
        logger.info(f"Benutzer {user_id} gelöscht.")
