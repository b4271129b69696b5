from typing import Dict, Optional

from pydantic import BaseModel, Field


class ProjectConfig(BaseModel):
    """
    Anzeigedaten eines Projekts. Die Kategorien selbst (PONTO/ROTEIRO) sind fest
    im Analysemodul hinterlegt, hier stehen nur Name und Legenden für den Bericht.
    """
    name: str
    legends: Dict[str, str] = Field(default_factory=dict)


def _default_projects() -> Dict[str, ProjectConfig]:
    return {
        "campo-largo": ProjectConfig(
            name="ENGIE - CAMPO LARGO",
            legends={
                "PONTO 1": "PORTARIA PRINCIPAL",
                "PONTO 2": "ROTATÓRIA PARQUE 10 COMPLEMENTO PARQUE 2",
                "PONTO 3": "SUBESTAÇÃO CAMPO LARGO",
                "PONTO 4": "PORTARIA 3 CAMPO LARGO",
                "PONTO 5": "ROTATÓRIA DO PARQUE 11, 12 E 13",
                "PONTO 6": "ROTATÓRIA PARQUE 19, 20 E 22",
                "PONTO 7": "PRÉDIO CENTRAL - BORRACHARIA",
                "PONTO 8": "VILA ENGIE",
            },
        ),
        "umburanas": ProjectConfig(
            name="ENGIE - UMBURANAS",
            legends={
                "PONTO 1": "PORTARIA PRINCIPAL UMBURANAS",
                "PONTO 2": "PARQUE 19 AG 6",
                "PONTO 3": "PARQUE 2 AERO 10",
                "PONTO 4": "SUBESTAÇÃO UMBURANAS",
                "PONTO 5": "ROTATÓRIA PARQUE 8 COM 16",
                "PONTO 6": "ROTATÓRIA DO PARQUE 9 COM 5, 10 E 23",
                "PONTO 7": "PARQUE 10 AG 6",
                "PONTO 8": "VILA ENGIE",
            },
        ),
        "gentio-do-ouro": ProjectConfig(
            name="ENGIE - GENTIO DO OURO",
            legends={
                "ROTEIRO 1": "ROTA NORTE - PARQUES 1 A 5",
                "ROTEIRO 2": "ROTA SUL - PARQUES 6 A 10",
                "ROTEIRO 3": "ROTA LESTE - PARQUES 11 A 15",
                "ROTEIRO 4": "ROTA OESTE - PARQUES 16 A 20",
                "ROTEIRO 5": "ROTA CENTRAL - SUBESTAÇÃO E VILA",
            },
        ),
    }


class ProjectsConfig(BaseModel):
    """
    Abschnitt 'projects' der Config: Projekt-ID -> ProjectConfig.
    Fehlt der Abschnitt, gelten die drei bekannten ENGIE-Projekte.
    """
    projects: Dict[str, ProjectConfig] = Field(default_factory=_default_projects)

    def get_project(self, project_id: str) -> Optional[ProjectConfig]:
        return self.projects.get(project_id)

    def display_name(self, project_id: str) -> str:
        project = self.get_project(project_id)
        return project.name if project else "Projeto"

    def legends(self, project_id: str) -> Dict[str, str]:
        project = self.get_project(project_id)
        return dict(project.legends) if project else {}
