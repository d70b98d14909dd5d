class NarrativeProviderError(RuntimeError):
    """Base error for narrative generation."""


class ProviderUnavailable(NarrativeProviderError):
    """Network, auth, rate-limit or empty-content failure of one provider."""

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class MalformedResponse(NarrativeProviderError):
    """Provider content that is not JSON or does not match the narrative schema."""
