"""Dimension percentages from the three questionnaire steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .taxonomy import Dimension, Taxonomy, get_taxonomy


@dataclass(frozen=True)
class ProfileScores:
    executor: float = 0.0
    comunicador: float = 0.0
    planejador: float = 0.0
    analista: float = 0.0
    raw_counts: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.raw_counts.values())

    def percentage(self, dimension: Dimension) -> float:
        return getattr(self, dimension.field)

    def as_dict(self) -> dict[str, float]:
        return {dimension.field: self.percentage(dimension) for dimension in Dimension}


def selected_adjectives(*steps: Iterable[str] | None) -> list[str]:
    """Flatten the steps in order, dropping duplicates inside a step."""
    flattened: list[str] = []
    for step in steps:
        seen: set[str] = set()
        for adjective in step or ():
            if adjective in seen:
                continue
            seen.add(adjective)
            flattened.append(adjective)
    return flattened


def calculate_profile_scores(
    step1: Iterable[str] | None,
    step2: Iterable[str] | None,
    step3: Iterable[str] | None,
    taxonomy: Taxonomy | None = None,
) -> ProfileScores:
    """Percentage per dimension over all mapped selections.

    Each percentage is rounded to two decimals on its own, so the four
    values can miss 100 by a few hundredths. Empty input gives all zeros.
    """
    taxonomy = taxonomy or get_taxonomy()
    counts = {dimension.value: 0 for dimension in Dimension}
    for adjective in selected_adjectives(step1, step2, step3):
        dimension = taxonomy.dimension_of(adjective)
        if dimension is not None:
            counts[dimension.value] += 1

    total = sum(counts.values())
    percentages = {
        dimension.field: round(counts[dimension.value] / total * 100, 2) if total > 0 else 0.0
        for dimension in Dimension
    }
    return ProfileScores(raw_counts=counts, **percentages)
