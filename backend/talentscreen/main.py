import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from .platform.brand import BRAND_APP_DESCRIPTION, BRAND_NAME
from .platform.config import settings
from .platform.database import SessionLocal, init_db
from .platform.errors import register_exception_handlers
from .platform.logging import setup_logging
from .platform.middleware import RateLimitMiddleware, RequestLoggingMiddleware, SecurityHeadersMiddleware
from .components.assessments.api import candidate_router as assessment_candidate_router
from .components.assessments.api import router as assessments_router
from .components.candidates.api import data_router
from .components.candidates.api import router as candidates_router
from .components.jobs.api import router as jobs_router
from .components.narrative.providers import is_configured_secret
from .components.records.api import router as files_router

setup_logging()
logger = logging.getLogger("talentscreen")

API_PREFIX = "/api/v1"
LOCAL_DEV_ORIGINS = ("http://localhost:5173", "http://localhost:3000")


def _uses_sql_store() -> bool:
    return settings.RECORD_STORE_BACKEND.strip().lower() == "sql"


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if _uses_sql_store():
        init_db()
    logger.info(
        "%s API started env=%s record_store=%s narrative_providers=%s",
        BRAND_NAME,
        settings.DEPLOYMENT_ENV,
        settings.RECORD_STORE_BACKEND,
        ",".join(settings.narrative_provider_names),
    )
    yield


def _cors_origins() -> list[str]:
    origins = [settings.FRONTEND_URL, *LOCAL_DEV_ORIGINS]
    extra = settings.CORS_EXTRA_ORIGINS or ""
    origins.extend(part.strip() for part in extra.split(","))
    return [origin for origin in dict.fromkeys(origins) if origin]


def _init_sentry() -> None:
    dsn = settings.SENTRY_DSN or ""
    if not dsn.startswith("https://"):
        return
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=dsn,
        environment=settings.DEPLOYMENT_ENV,
        traces_sample_rate=0.1,
        integrations=[FastApiIntegration(), SqlalchemyIntegration()],
    )


app = FastAPI(
    title=f"{BRAND_NAME} API",
    description=BRAND_APP_DESCRIPTION,
    version="1.0.0",
    docs_url=None if settings.is_production else "/api/docs",
    openapi_url=None if settings.is_production else "/api/openapi.json",
    lifespan=lifespan,
)
register_exception_handlers(app)

# Added last runs first: request logging wraps everything else
app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Requested-With", "X-Request-ID"],
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)
_init_sentry()

for _router in (
    assessments_router,
    assessment_candidate_router,
    candidates_router,
    data_router,
    jobs_router,
    files_router,
):
    app.include_router(_router, prefix=API_PREFIX)


_PROVIDER_KEYS = {
    "openai": lambda: settings.OPENAI_API_KEY,
    "groq": lambda: settings.GROQ_API_KEY,
    "anthropic": lambda: settings.ANTHROPIC_API_KEY,
}


def _database_reachable() -> bool:
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("Health check database probe failed")
        return False
    finally:
        db.close()


@app.get("/health")
def health_check():
    db_ok = _database_reachable()
    providers = {
        name: is_configured_secret(_PROVIDER_KEYS[name]())
        for name in settings.narrative_provider_names
        if name in _PROVIDER_KEYS
    }
    healthy = (db_ok or not _uses_sql_store()) and any(providers.values())
    return {
        "status": "healthy" if healthy else "degraded",
        "service": "talentscreen-api",
        "database": db_ok,
        "record_store": settings.RECORD_STORE_BACKEND,
        "narrative_providers": providers,
    }
