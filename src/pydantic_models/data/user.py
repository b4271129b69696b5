from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

Role = Literal["admin", "viewer"]


class User(BaseModel):
    """
    Benutzer ohne Passwort-Hash; so wird er an die Oberfläche weitergegeben.
    Nur Administratoren dürfen hochladen, archivieren, löschen und exportieren.
    """
    id: str
    username: str
    role: Role
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
