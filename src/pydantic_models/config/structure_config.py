from typing import Optional
from pydantic import BaseModel

class StructureConfig(BaseModel):
    """
    Modell für die Struktur-Konfiguration des Projekts.

    Attribute:
        prj_root (str): Wurzelverzeichnis des Projekts (Standard: aktuelles Verzeichnis).
        local_data_path (Optional[str]): Verzeichnis für die SQLite-Datenbank (Standard: "data").
        output_path (Optional[str]): Ausgabeverzeichnis für exportierte Berichte (Standard: "output").
        upload_path (Optional[str]): Ablage für hochgeladene Planilhas, falls sie aufbewahrt werden sollen.
    """
    prj_root: str = "."
    local_data_path: Optional[str] = "data"
    output_path: Optional[str] = "output"
    upload_path: Optional[str] = None
