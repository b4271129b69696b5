from typing import List
from pydantic import BaseModel, Field

class ReportConfig(BaseModel):
    contract_text: str = "CONTRATO: CONSCLWPTT.DPS.22.1982"
    locale: str = "pt_BR"
    timezone: str = "America/Bahia"     # Anzeige der Zeitstempel im Bericht
    numeric_format: str = "#,##0.00"
    footer_lines: List[str] = Field(
        default_factory=lambda: [
            "Relatório gerado automaticamente pelo sistema de Análise de Planilhas",
            "APLICATIVO DESENVOLVIDO - HLAS TECH TODOS OS DIREITOS RESERVADOS ®",
        ]
    )
