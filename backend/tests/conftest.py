import os
# Pin configuration before any app imports: local sqlite record store, no real LLM keys
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["RECORD_STORE_BACKEND"] = "sql"
os.environ["DEPLOYMENT_ENV"] = "test"
os.environ["NARRATIVE_PROVIDERS"] = "openai,groq"
os.environ["OPENAI_API_KEY"] = ""
os.environ["GROQ_API_KEY"] = ""
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["SENTRY_DSN"] = ""
os.environ["BACKEND_URL"] = "http://testserver"
os.environ["ASSESSMENT_PUBLIC_BASE_URL"] = "https://app.example.com"

import json
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from talentscreen.platform.database import Base, get_db
from talentscreen.main import app
from talentscreen.platform.middleware import _rate_limit_store
from talentscreen.components.narrative.service import NarrativeAnalysisClient, get_narrative_client
from talentscreen.components.records import tables
from talentscreen.components.records.sql_store import SqlRecordStore

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


VALID_NARRATIVE = {
    "perfil_principal": "Executor",
    "perfil_secundario": "Comunicador",
    "resumo_comportamental": "Perfil orientado a resultados, decidido e ativo, com boa capacidade de mobilizar pessoas.",
    "subcaracteristicas": ["Decidido", "Ativo", "Popular"],
    "pontos_fortes_contextuais": ["Toma decisões rapidamente em cenários de pressão"],
    "pontos_de_atencao": ["Pode se beneficiar de ouvir mais antes de decidir"],
    "indicadores_situacionais": {
        "exigencia_meio": "Alto",
        "aproveitamento": "Normal",
        "autoconfianca": "Muito Alto",
    },
}


class FakeProvider:
    """Narrative provider double: records prompts, returns ``response`` or raises ``error``."""

    def __init__(self, name: str, response: str | None = None, error: Exception | None = None):
        self.name = name
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db):
    return SqlRecordStore(db)


@pytest.fixture
def narrative_providers():
    """Provider chain used by the API; tests may replace its items."""
    return [FakeProvider("openai", response=json.dumps(VALID_NARRATIVE, ensure_ascii=False))]


@pytest.fixture(scope="function")
def client(db, narrative_providers):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_narrative_client] = lambda: NarrativeAnalysisClient(narrative_providers)
    Base.metadata.create_all(bind=engine)
    # Clear in-memory rate limit state between tests to prevent 429 bleed-through
    _rate_limit_store.clear()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    _rate_limit_store.clear()
    Base.metadata.drop_all(bind=engine)


# ---------------------------------------------------------------------------
# Helpers: seed record-store rows directly
# ---------------------------------------------------------------------------

def seed_job(store, title: str, owner_ids: list[int], **extra) -> dict:
    return store.insert_row(
        tables.jobs_table(),
        {tables.JOB_TITLE: title, tables.JOB_OWNERS: owner_ids, tables.JOB_DESCRIPTION: "Vaga", **extra},
    )


def seed_candidate(store, name: str, *, chat: bool = False, **fields) -> dict:
    table = tables.chat_candidates_table() if chat else tables.candidates_table()
    return store.insert_row(table, {tables.CANDIDATE_NAME: name, **fields})
