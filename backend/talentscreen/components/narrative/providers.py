"""
Text-generation providers for behavioral narratives.

Every provider takes the same prompt and returns the raw JSON text of its
answer. Any failure to obtain non-empty content is reported as
ProviderUnavailable; callers never see SDK exceptions.
"""

from __future__ import annotations

import logging
from typing import Protocol

from anthropic import Anthropic
from openai import OpenAI

from ...platform.config import Settings, settings as default_settings
from .errors import ProviderUnavailable
from .model_fallback import (
    PRIMARY_GPT_MINI_MODEL,
    PRIMARY_GROQ_MODEL,
    PRIMARY_HAIKU_MODEL,
    candidate_models_for,
    describe_provider_error,
    is_model_not_found_error,
)
from .prompts import NARRATIVE_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class NarrativeProvider(Protocol):
    name: str

    def generate(self, prompt: str) -> str: ...


class OpenAICompatibleProvider:
    """Chat-completions provider in JSON mode (OpenAI, or any compatible endpoint such as Groq)."""

    def __init__(
        self,
        name: str,
        *,
        api_key: str,
        model: str,
        default_model: str,
        base_url: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 2048,
        timeout: float = 30.0,
    ):
        self.name = name
        self.models = candidate_models_for(name, model, default_model)
        self.temperature = temperature
        self.max_tokens = max_tokens
        # Fallback happens across providers; no SDK-level retries
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)

    def generate(self, prompt: str) -> str:
        last_error: Exception | None = None
        for model in self.models:
            try:
                completion = self.client.chat.completions.create(
                    model=model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                    response_format={"type": "json_object"},
                )
            except Exception as exc:
                last_error = exc
                if is_model_not_found_error(exc):
                    logger.warning("Narrative model unavailable provider=%s model=%s", self.name, model)
                    continue
                raise ProviderUnavailable(self.name, describe_provider_error(exc)) from exc
            content = completion.choices[0].message.content if completion.choices else None
            if not content or not content.strip():
                raise ProviderUnavailable(self.name, "empty response")
            logger.info("Narrative generated provider=%s model=%s", self.name, model)
            return content
        raise ProviderUnavailable(self.name, describe_provider_error(last_error)) from last_error


class AnthropicProvider:
    """Claude messages API; JSON is requested through the system prompt."""

    name = "anthropic"

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 2048,
        timeout: float = 30.0,
    ):
        self.models = candidate_models_for(self.name, model, PRIMARY_HAIKU_MODEL)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = Anthropic(api_key=api_key, timeout=timeout, max_retries=0)

    def generate(self, prompt: str) -> str:
        last_error: Exception | None = None
        for model in self.models:
            try:
                response = self.client.messages.create(
                    model=model,
                    max_tokens=self.max_tokens,
                    temperature=self.temperature,
                    system=NARRATIVE_SYSTEM_PROMPT,
                    messages=[{"role": "user", "content": prompt}],
                )
            except Exception as exc:
                last_error = exc
                if is_model_not_found_error(exc):
                    logger.warning("Narrative model unavailable provider=%s model=%s", self.name, model)
                    continue
                raise ProviderUnavailable(self.name, describe_provider_error(exc)) from exc
            text = response.content[0].text if response.content else ""
            if not text or not text.strip():
                raise ProviderUnavailable(self.name, "empty response")
            logger.info("Narrative generated provider=%s model=%s", self.name, model)
            return text
        raise ProviderUnavailable(self.name, describe_provider_error(last_error)) from last_error


def is_configured_secret(value: str | None) -> bool:
    cleaned = (value or "").strip().lower()
    return cleaned not in {"", "skip", "changeme"}


def _build_openai(cfg: Settings) -> NarrativeProvider | None:
    if not is_configured_secret(cfg.OPENAI_API_KEY):
        return None
    return OpenAICompatibleProvider(
        "openai",
        api_key=cfg.OPENAI_API_KEY,
        model=cfg.OPENAI_MODEL,
        default_model=PRIMARY_GPT_MINI_MODEL,
        temperature=cfg.NARRATIVE_TEMPERATURE,
        max_tokens=cfg.NARRATIVE_MAX_TOKENS,
        timeout=cfg.NARRATIVE_TIMEOUT_SECONDS,
    )


def _build_groq(cfg: Settings) -> NarrativeProvider | None:
    if not is_configured_secret(cfg.GROQ_API_KEY):
        return None
    return OpenAICompatibleProvider(
        "groq",
        api_key=cfg.GROQ_API_KEY,
        model=cfg.GROQ_MODEL,
        default_model=PRIMARY_GROQ_MODEL,
        base_url=cfg.GROQ_BASE_URL,
        temperature=cfg.NARRATIVE_TEMPERATURE,
        max_tokens=cfg.NARRATIVE_MAX_TOKENS,
        timeout=cfg.NARRATIVE_TIMEOUT_SECONDS,
    )


def _build_anthropic(cfg: Settings) -> NarrativeProvider | None:
    if not is_configured_secret(cfg.ANTHROPIC_API_KEY):
        return None
    return AnthropicProvider(
        api_key=cfg.ANTHROPIC_API_KEY,
        model=cfg.CLAUDE_MODEL,
        temperature=cfg.NARRATIVE_TEMPERATURE,
        max_tokens=cfg.NARRATIVE_MAX_TOKENS,
        timeout=cfg.NARRATIVE_TIMEOUT_SECONDS,
    )


PROVIDER_BUILDERS = {
    "openai": _build_openai,
    "groq": _build_groq,
    "anthropic": _build_anthropic,
}


def build_providers(cfg: Settings | None = None) -> list[NarrativeProvider]:
    """Instantiate the configured provider chain, in order.

    Unknown names are ignored, duplicates dropped, and providers without an
    API key skipped.
    """
    cfg = cfg or default_settings
    providers: list[NarrativeProvider] = []
    seen: set[str] = set()
    for name in cfg.narrative_provider_names:
        if name in seen:
            continue
        seen.add(name)
        builder = PROVIDER_BUILDERS.get(name)
        if builder is None:
            logger.warning("Unknown narrative provider %r ignored", name)
            continue
        provider = builder(cfg)
        if provider is None:
            logger.info("Narrative provider %s skipped: no API key", name)
            continue
        providers.append(provider)
    return providers
