"""
Narrative analysis client with ordered provider fallback.

Providers are tried strictly in sequence with the identical prompt. The first
response that parses into a valid Narrative wins. When every provider fails
the outcome carries no payload, unless some provider answered with content
that could not be validated, in which case the last such text is kept raw so
it can still be stored and inspected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..taxonomy.scoring import ProfileScores
from .errors import MalformedResponse, NarrativeProviderError
from .prompts import build_narrative_prompt
from .providers import NarrativeProvider, build_providers
from .schemas import Narrative, parse_narrative

logger = logging.getLogger(__name__)


@dataclass
class NarrativeOutcome:
    payload: Optional[str] = None
    narrative: Optional[Narrative] = None
    provider: Optional[str] = None
    attempts: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.narrative is not None


class NarrativeAnalysisClient:
    def __init__(self, providers: Sequence[NarrativeProvider]):
        self.providers = list(providers)

    @property
    def provider_names(self) -> list[str]:
        return [provider.name for provider in self.providers]

    def analyze(self, scores: ProfileScores, adjectives: list[str]) -> NarrativeOutcome:
        return self.analyze_prompt(build_narrative_prompt(scores, adjectives))

    def analyze_prompt(self, prompt: str) -> NarrativeOutcome:
        outcome = NarrativeOutcome()
        if not self.providers:
            logger.warning("No narrative providers configured; skipping analysis")
            return outcome

        malformed_payload: str | None = None
        for provider in self.providers:
            outcome.attempts.append(provider.name)
            try:
                text = provider.generate(prompt)
            except NarrativeProviderError as exc:
                logger.warning("Narrative provider %s failed: %s", provider.name, exc)
                continue
            except Exception:
                logger.exception("Narrative provider %s raised unexpectedly", provider.name)
                continue
            try:
                narrative = parse_narrative(text)
            except MalformedResponse as exc:
                logger.warning("Narrative provider %s returned malformed content: %s", provider.name, exc)
                malformed_payload = text
                continue

            outcome.narrative = narrative
            outcome.payload = narrative.model_dump_json()
            outcome.provider = provider.name
            logger.info(
                "Narrative produced provider=%s attempts=%d perfil_principal=%s",
                provider.name,
                len(outcome.attempts),
                narrative.perfil_principal,
            )
            return outcome

        if malformed_payload is not None:
            outcome.payload = malformed_payload
        logger.error("All narrative providers failed attempts=%s", ",".join(outcome.attempts))
        return outcome


def get_narrative_client() -> NarrativeAnalysisClient:
    """FastAPI dependency; overridden in tests."""
    return NarrativeAnalysisClient(build_providers())
