import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Type

import yaml
from cryptography.fernet import Fernet  # type: ignore[import]
from loguru import logger
from pydantic import BaseModel

from pydantic_models.config.auth_config import AuthConfig
from pydantic_models.config.database_config import DatabaseConfig
from pydantic_models.config.logging_config import LoggingConfig
from pydantic_models.config.projects_config import ProjectsConfig
from pydantic_models.config.report_config import ReportConfig
from pydantic_models.config.structure_config import StructureConfig
from shared_modules.utils import ensure_dir

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / ".config" / "analise_config.yaml"


class Config:
    """
    Singleton für das Laden und Prüfen der Konfiguration.
    Nutzt statische Pydantic-Modelle für alle Abschnitte.
    Fehlt die Datei oder ein Abschnitt, gelten die Defaults der Modelle.
    """

    _instance: Optional["Config"] = None

    def __new__(cls, config_path: Optional[Path] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None):
        # Fallback-Logger für Fehler beim Laden der Config
        logger.remove()
        logger.add(sys.stderr, level="WARNING")
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        try:
            self.raw_config: Dict[str, Any] = self._load_config()
            self.logging = self._parse_section(self.raw_config, "logging", LoggingConfig)
            self.structure = self._parse_section(self.raw_config, "structure", StructureConfig)
            self._setup_logging()
            logger.debug(f"Lade Konfiguration von {self.config_path}")

            self.database = self._parse_section(self.raw_config, "database", DatabaseConfig)
            self.report = self._parse_section(self.raw_config, "report", ReportConfig)
            self.auth = self._parse_section(self.raw_config, "auth", AuthConfig)
            self.projects = self._parse_projects(self.raw_config.get("projects"))
        except Exception as e:
            logger.error(f"Fehler beim Laden der Konfiguration: {e}")
            raise

        self._validate_structure_and_paths()
        logger.debug("Konfiguration erfolgreich geladen und validiert.")
        self._initialized = True

    def _setup_logging(self) -> None:
        """
        Initialisiert loguru mit den Einstellungen aus der Config-Datei.
        Eine relative Logdatei landet im Projektverzeichnis.
        """
        logger.remove()
        log_file = getattr(self.logging, "log_file", None)
        log_level = getattr(self.logging, "log_level", "INFO") or "INFO"
        if log_file:
            log_path = Path(log_file)
            if not log_path.is_absolute():
                log_path = self.prj_root / log_path
            logger.add(log_path, level=log_level)
        logger.add(sys.stderr, level=log_level)

    def _load_config(self) -> Dict[str, Any]:
        """
        Lädt die YAML-Konfigurationsdatei. Eine fehlende Datei ergibt eine leere Config.
        """
        if not self.config_path.exists():
            logger.warning(f"Konfigurationsdatei {self.config_path} fehlt, verwende Defaults.")
            return {}
        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _parse_section(self, config: Dict[str, Any], section: str, model: Type[BaseModel]) -> Any:
        """
        Parst einen Abschnitt der Config mit dem passenden Pydantic-Modell.
        """
        data = config.get(section) or {}
        logger.debug(f"Parsiere Abschnitt '{section}': {data}")
        return model(**data)

    def _parse_projects(self, projects: Optional[Dict[str, Any]]) -> ProjectsConfig:
        if not projects:
            return ProjectsConfig()
        logger.debug(f"Parsiere Projekte: {list(projects)}")
        return ProjectsConfig(projects=projects)

    def _validate_structure_and_paths(self) -> None:
        """
        Prüft einmalig die Projektwurzel und legt Daten- und Ausgabeverzeichnis bei Bedarf an.
        """
        if not self.prj_root.exists():
            logger.error(f"Projektwurzel existiert nicht: {self.prj_root}")
            raise FileNotFoundError(f"Projektwurzel nicht gefunden: {self.prj_root}")

        if not self.database.sqlite_db_name:
            logger.error("database.sqlite_db_name ist nicht gesetzt.")
            raise ValueError("database.sqlite_db_name ist Pflicht.")

        ensure_dir(self.data_dir)
        ensure_dir(self.output_dir)

    @property
    def prj_root(self) -> Path:
        return Path(self.structure.prj_root).expanduser().resolve()

    @property
    def data_dir(self) -> Path:
        return self.prj_root / (self.structure.local_data_path or "data")

    @property
    def output_dir(self) -> Path:
        return self.prj_root / (self.structure.output_path or "output")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.database.sqlite_db_name

    def get(self, key: str, default: Any = None) -> Any:
        """
        Allgemeiner Getter für beliebige Felder (dot-notation für verschachtelte Felder).
        """
        parts = key.split(".")
        val = self.raw_config
        for part in parts:
            if isinstance(val, dict) and part in val:
                val = val[part]
            else:
                logger.debug(f"Feld '{key}' nicht gefunden, Rückgabe Default: {default}")
                return default
        return val

    def get_secret(self, key: str, default: Any = None) -> Optional[str]:
        """
        Gibt ein Secret (z. B. Passwort, API-Key) aus Umgebungsvariablen zurück.
        """
        logger.debug(f"Lese Secret '{key}' aus Umgebungsvariablen.")
        return os.getenv(key, default)

    def get_decrypted_secret(
        self, key: str, fernet_key_env: str = "FERNET_KEY", default: Any = None
    ) -> Optional[str]:
        """
        Holt ein verschlüsseltes Secret aus der Umgebung und entschlüsselt es mit Fernet.
        """
        encrypted = os.getenv(key)
        fernet_key = os.getenv(fernet_key_env)
        logger.debug(f"Versuche Secret '{key}' mit Fernet-Key '{fernet_key_env}' zu entschlüsseln.")
        if not encrypted or not fernet_key:
            logger.debug("Kein Secret oder Key gefunden, Rückgabe Default.")
            return default
        try:
            f = Fernet(fernet_key.encode())
            decrypted = f.decrypt(encrypted.encode())
            logger.debug("Secret erfolgreich entschlüsselt.")
            return decrypted.decode()
        except Exception as e:
            logger.error(f"Entschlüsselung fehlgeschlagen: {e}")
            raise RuntimeError(f"Entschlüsselung fehlgeschlagen: {e}")

    def resolve_password(self, password_env: str) -> Optional[str]:
        """
        Passwort für einen Seed-Benutzer: zuerst <password_env>_ENC (Fernet), dann Klartext.
        """
        return self.get_decrypted_secret(f"{password_env}_ENC") or self.get_secret(password_env)


if __name__ == "__main__":
    config = Config()
    logger.info("Projektwurzel: {}", config.prj_root)
    logger.info("Datenbank: {}", config.db_path)
