from typing import List, Literal

from pydantic import BaseModel, Field


class SeedUserConfig(BaseModel):
    """
    Ein Benutzer, der beim ersten Start angelegt wird.
    Das Passwort steht nie in der Config, sondern in der Umgebung:
    <password_env>_ENC (Fernet-verschlüsselt) oder <password_env> (Klartext).
    """
    username: str
    role: Literal["admin", "viewer"] = "viewer"
    password_env: str


class AuthConfig(BaseModel):
    seed_users: List[SeedUserConfig] = Field(
        default_factory=lambda: [
            SeedUserConfig(username="admin", role="admin", password_env="ADMIN_PASSWORD"),
        ]
    )
