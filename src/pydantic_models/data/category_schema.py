import re
from typing import List

from pydantic import BaseModel, Field


class CategorySchema(BaseModel):
    """
    Feste Kategorienliste eines Projekttyps, z.B. PONTO 1..8 oder ROTEIRO 1..5.
    Ein Treffer ist das Token, optionaler Leerraum und die Kategorienummer,
    ohne Beachtung der Gross-/Kleinschreibung. Nach der Nummer wird nicht abgegrenzt:
    "PONTO 10" zählt auch für "PONTO 1".
    """
    token: str
    count: int = Field(gt=0)

    @property
    def labels(self) -> List[str]:
        return [f"{self.token} {number}" for number in range(1, self.count + 1)]

    def pattern(self, number: int) -> "re.Pattern[str]":
        return re.compile(rf"{re.escape(self.token)}\s*{number}", re.IGNORECASE)
