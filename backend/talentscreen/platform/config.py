from pydantic_settings import BaseSettings
from typing import Optional

from .brand import BRAND_PUBLIC_URL


class Settings(BaseSettings):
    # Deployment environment
    DEPLOYMENT_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database backing the built-in record store
    DATABASE_URL: str = "sqlite:///./talentscreen.db"

    # Record store: "sql" (built-in, SQLAlchemy) or "rest" (Baserow-style API)
    RECORD_STORE_BACKEND: str = "sql"
    RECORD_STORE_URL: str = "https://api.baserow.io"
    RECORD_STORE_TOKEN: str = ""
    RECORD_STORE_TIMEOUT_SECONDS: float = 30.0
    RECORD_STORE_PAGE_SIZE: int = 200

    # Record store table identifiers
    USERS_TABLE_ID: str = "711"
    JOBS_TABLE_ID: str = "709"
    CANDIDATES_TABLE_ID: str = "710"
    CHAT_CANDIDATES_TABLE_ID: str = "712"
    ASSESSMENTS_TABLE_ID: str = "727"
    RESULTS_TABLE_ID: str = "728"

    # Narrative providers, tried in order
    NARRATIVE_PROVIDERS: str = "openai,groq"
    NARRATIVE_TEMPERATURE: float = 0.1
    NARRATIVE_MAX_TOKENS: int = 2048
    NARRATIVE_TIMEOUT_SECONDS: float = 30.0

    # OpenAI
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"

    # Groq (OpenAI-compatible endpoint)
    GROQ_API_KEY: str = ""
    GROQ_MODEL: str = "llama-3.1-8b-instant"
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"

    # Claude / Anthropic
    ANTHROPIC_API_KEY: str = ""
    CLAUDE_MODEL: str = "claude-3-5-haiku-latest"

    # Assessment configuration
    ASSESSMENT_EXPIRY_DAYS: int = 30
    ASSESSMENT_PUBLIC_BASE_URL: str = BRAND_PUBLIC_URL
    RESULT_POLL_INTERVAL_SECONDS: float = 5.0

    # Résumé intake
    MAX_RESUME_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # URLs
    FRONTEND_URL: str = "http://localhost:5173"
    BACKEND_URL: str = "http://localhost:8000"
    # Optional comma-separated extra CORS origins
    CORS_EXTRA_ORIGINS: Optional[str] = None

    # Sentry
    SENTRY_DSN: Optional[str] = None

    @property
    def narrative_provider_names(self) -> list[str]:
        """Configured provider names, lower-cased, in declaration order."""
        return [
            name.strip().lower()
            for name in (self.NARRATIVE_PROVIDERS or "").split(",")
            if name.strip()
        ]

    @property
    def is_production(self) -> bool:
        return (self.DEPLOYMENT_ENV or "").strip().lower() == "production"

    def model_post_init(self, __context) -> None:
        backend = (self.RECORD_STORE_BACKEND or "").strip().lower()
        if backend not in {"sql", "rest"}:
            raise ValueError("RECORD_STORE_BACKEND must be 'sql' or 'rest'.")
        if self.ASSESSMENT_EXPIRY_DAYS < 1:
            raise ValueError("ASSESSMENT_EXPIRY_DAYS must be at least 1.")

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }


settings = Settings()
