from typing import Optional
from pydantic import BaseModel

class DatabaseConfig(BaseModel):
    sqlite_db_name: Optional[str] = "analise_planilhas.sqlite3"
    history_limit: int = 10     # Anzahl der aufbewahrten Einzelanalysen
