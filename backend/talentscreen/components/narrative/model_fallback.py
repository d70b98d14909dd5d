from __future__ import annotations


PRIMARY_HAIKU_MODEL = "claude-3-5-haiku-latest"
SNAPSHOT_HAIKU_MODEL = "claude-3-5-haiku-20241022"
LEGACY_HAIKU_MODEL = "claude-3-haiku-20240307"

PRIMARY_GPT_MINI_MODEL = "gpt-4o-mini"
SNAPSHOT_GPT_MINI_MODEL = "gpt-4o-mini-2024-07-18"

PRIMARY_GROQ_MODEL = "llama-3.1-8b-instant"
LEGACY_GROQ_MODEL = "llama3-8b-8192"

# Interchangeable aliases per provider, in preference order
_ALIAS_FAMILIES: dict[str, tuple[tuple[str, ...], ...]] = {
    "anthropic": ((PRIMARY_HAIKU_MODEL, SNAPSHOT_HAIKU_MODEL, LEGACY_HAIKU_MODEL),),
    "openai": ((PRIMARY_GPT_MINI_MODEL, SNAPSHOT_GPT_MINI_MODEL),),
    "groq": ((PRIMARY_GROQ_MODEL, LEGACY_GROQ_MODEL),),
}


def candidate_models_for(provider: str, model: str | None, default: str) -> list[str]:
    """Deterministic model chain for one provider: the configured model, then its known aliases."""
    resolved = (model or "").strip() or default

    candidates: list[str] = []

    def _add(value: str) -> None:
        cleaned = (value or "").strip()
        if cleaned and cleaned not in candidates:
            candidates.append(cleaned)

    _add(resolved)
    for family in _ALIAS_FAMILIES.get(provider, ()):
        if resolved.lower() in family:
            for alias in family:
                _add(alias)
    return candidates


def is_model_not_found_error(exc: Exception) -> bool:
    text = str(exc or "").lower()
    if not text:
        return False
    return (
        "not_found_error" in text
        or "model_not_found" in text
        or "model_decommissioned" in text
        or ("model" in text and ("not found" in text or "does not exist" in text))
        or ("error code: 404" in text and "model" in text)
    )


def describe_provider_error(exc: Exception) -> str:
    """Coarse failure category for logs."""
    text = str(exc or "").lower()
    status = getattr(exc, "status_code", None)
    if status == 429 or "rate limit" in text or "rate_limit" in text:
        return "rate_limited"
    if status in {401, 403} or "api key" in text or "authentication" in text:
        return "auth"
    if "timeout" in text or "timed out" in text:
        return "timeout"
    if is_model_not_found_error(exc):
        return "model_not_found"
    if isinstance(status, int) and status >= 500:
        return "server_error"
    return "error"
