"""Adjective taxonomy for the behavioral questionnaire.

The adjective list is what candidates choose from in each of the three
steps; the mapping assigns a subset of those adjectives to one of the four
behavioral dimensions. Adjectives outside the mapping are valid answers that
score nothing.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping


class Dimension(str, enum.Enum):
    """Behavioral dimension, keyed by its one-letter code."""

    EXECUTOR = "E"
    COMUNICADOR = "C"
    PLANEJADOR = "P"
    ANALISTA = "A"

    @property
    def field(self) -> str:
        """Result-row field holding this dimension's percentage."""
        return self.name.lower()

    @property
    def label(self) -> str:
        """Display name, as used in narrative payloads."""
        return self.name.capitalize()

    @classmethod
    def from_label(cls, label: str | None) -> "Dimension | None":
        cleaned = (label or "").strip().lower()
        for dimension in cls:
            if dimension.field == cleaned:
                return dimension
        return None


ADJECTIVES: tuple[str, ...] = (
    "Alegre", "Animado", "Anti-Social", "Arrogante", "Ativo", "Bem-Quisto", "Bom Companheiro",
    "Calculista", "Calmo", "Compreensivo", "Cumpridor", "Decidido", "Dedicado", "Depressivo",
    "Desconfiado", "Egocêntrico", "Egoísta", "Empolgante", "Enérgico", "Entusiasta",
    "Estrovertido", "Exuberante", "Firme", "Frio", "Habilidoso", "Inflexível", "Influenciador",
    "Ingênuo", "Inseguro", "Insensível", "Audacioso (Ousado)", "Auto-Disciplinado",
    "Auto-Suficiente", "Barulhento", "Bem-Humorado", "Comunicativo", "Conservador",
    "Contagiante", "Corajoso", "Crítico", "Desmotivado", "Desorganizado", "Destacado",
    "Discreto", "Eficiente", "Equilibrado", "Espalhafatoso", "Estimulante", "Exagerado",
    "Exigente", "Idealista", "Impaciente", "Indeciso", "Independente", "Indisciplinado",
    "Intolerante", "Introvertido", "Leal", "Líder", "Medroso", "Minucioso", "Modesto",
    "Orgulhoso", "Otimista", "Paciente", "Perfeccionista", "Persistente", "Pessimista",
    "Popular", "Prático", "Pretensioso", "Procrastinator", "Racional", "Reservado",
    "Resoluto (Decidido)", "Rotineiro", "Sarcástico", "Sensível", "Sentimental", "Simpático",
    "Sincero", "Temeroso", "Teórico", "Tranquilo", "Vaidoso", "Vingativo",
)

DIMENSION_ADJECTIVES: dict[Dimension, tuple[str, ...]] = {
    Dimension.EXECUTOR: (
        "Audacioso (Ousado)", "Líder", "Exigente", "Decidido", "Independente",
        "Corajoso", "Firme", "Ativo", "Enérgico",
    ),
    Dimension.COMUNICADOR: (
        "Comunicativo", "Popular", "Entusiasta", "Otimista", "Contagiante",
        "Influenciador", "Alegre", "Animado", "Simpático",
    ),
    Dimension.PLANEJADOR: (
        "Calmo", "Paciente", "Leal", "Tranquilo", "Conservador",
        "Dedicado", "Compreensivo", "Bom Companheiro", "Modesto",
    ),
    Dimension.ANALISTA: (
        "Perfeccionista", "Minucioso", "Racional", "Calculista", "Crítico",
        "Prático", "Auto-Disciplinado", "Eficiente", "Cumpridor",
    ),
}


@dataclass(frozen=True)
class Taxonomy:
    adjectives: tuple[str, ...]
    dimensions: Mapping[str, Dimension]

    @classmethod
    def build(
        cls,
        adjectives: Iterable[str],
        dimension_adjectives: Mapping[Dimension, Iterable[str]],
    ) -> "Taxonomy":
        mapping: dict[str, Dimension] = {}
        for dimension, members in dimension_adjectives.items():
            for adjective in members:
                if adjective in mapping and mapping[adjective] is not dimension:
                    raise ValueError(f"Adjective {adjective!r} mapped to more than one dimension")
                mapping[adjective] = dimension
        return cls(adjectives=tuple(adjectives), dimensions=MappingProxyType(mapping))

    def dimension_of(self, adjective: str) -> Dimension | None:
        return self.dimensions.get(adjective)


@lru_cache(maxsize=1)
def get_taxonomy() -> Taxonomy:
    """The process-wide taxonomy; constructed once on first use."""
    return Taxonomy.build(ADJECTIVES, DIMENSION_ADJECTIVES)
