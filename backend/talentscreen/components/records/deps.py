from fastapi import Depends
from sqlalchemy.orm import Session

from ...platform.config import settings
from ...platform.database import get_db
from .rest_store import RestRecordStore
from .sql_store import SqlRecordStore
from .store import RecordStore


def build_record_store(db: Session) -> RecordStore:
    if settings.RECORD_STORE_BACKEND.strip().lower() == "rest":
        return RestRecordStore(
            settings.RECORD_STORE_URL,
            settings.RECORD_STORE_TOKEN,
            timeout=settings.RECORD_STORE_TIMEOUT_SECONDS,
            page_size=settings.RECORD_STORE_PAGE_SIZE,
        )
    return SqlRecordStore(db)


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    """FastAPI dependency resolving the configured record store."""
    return build_record_store(db)
