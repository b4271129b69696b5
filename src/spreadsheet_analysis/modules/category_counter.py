from typing import Dict

from loguru import logger

from pydantic_models.data.category_schema import CategorySchema
from pydantic_models.data.workbook import Workbook

POINT_SCHEMA = CategorySchema(token="PONTO", count=8)
ROUTE_SCHEMA = CategorySchema(token="ROTEIRO", count=5)

# Projekt-ID -> Kategorienliste; unbekannte Projekte zählen Pontos
CATEGORY_SCHEMAS: Dict[str, CategorySchema] = {
    "campo-largo": POINT_SCHEMA,
    "umburanas": POINT_SCHEMA,
    "gentio-do-ouro": ROUTE_SCHEMA,
}


def schema_for_project(project_id: str) -> CategorySchema:
    return CATEGORY_SCHEMAS.get(project_id, POINT_SCHEMA)


def empty_counts(schema: CategorySchema) -> Dict[str, int]:
    return {label: 0 for label in schema.labels}


def count_categories(workbook: Workbook, schema: CategorySchema) -> Dict[str, int]:
    """
    Zählt in allen Textzellen aller Blätter die Vorkommen jeder Kategorie.
    Zahlen und Datumswerte werden übersprungen. Eine Zelle kann mehrfach und für
    mehrere Kategorien zählen.
    """
    counts = empty_counts(schema)
    patterns = [(label, schema.pattern(number)) for number, label in enumerate(schema.labels, start=1)]

    for sheet in workbook.sheets:
        for row in sheet.rows:
            for cell in row:
                if not isinstance(cell, str) or not cell:
                    continue
                for label, pattern in patterns:
                    counts[label] += len(pattern.findall(cell))

    logger.debug(f"Kategorien ({schema.token}): {counts}")
    return counts
