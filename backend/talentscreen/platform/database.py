from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .config import settings

_engine_kw: dict = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # Request handlers run in a threadpool
    _engine_kw = {"connect_args": {"check_same_thread": False}}
else:
    _engine_kw = {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}
engine = create_engine(settings.DATABASE_URL, **_engine_kw)

if settings.DATABASE_URL.startswith("sqlite"):
    @event.listens_for(engine, "connect")
    def _sqlite_busy_timeout(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """FastAPI dependency that yields a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class Base(DeclarativeBase):
    pass


def init_db() -> None:
    """Create the built-in record store tables if they are missing."""
    from ..components.records import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
