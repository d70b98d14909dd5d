"""Record store on the application's own database."""

from __future__ import annotations

import logging
import mimetypes
import uuid
from pathlib import PurePath
from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...platform.config import settings
from ...shared.utils import link_ids, select_value
from .models import StoredFileBlob, StoredRecord
from .store import LINK_HAS_SUFFIX, RecordNotFound, RecordStoreUnavailable, StoredFile

logger = logging.getLogger(__name__)


def _row(record: StoredRecord) -> dict[str, Any]:
    return {**(record.data or {}), "id": record.id}


def _matches(row: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    for key, expected in filters.items():
        if key.endswith(LINK_HAS_SUFFIX):
            field = key[: -len(LINK_HAS_SUFFIX)]
            if int(expected) not in link_ids(row.get(field)):
                return False
            continue
        actual = row.get(key)
        if isinstance(actual, dict):
            actual = select_value(actual)
        if actual != expected and str(actual) != str(expected):
            return False
    return True


def public_file_url(name: str) -> str:
    return f"{settings.BACKEND_URL.rstrip('/')}/api/v1/files/{name}"


class SqlRecordStore:
    """RecordStore backed by the ``records`` and ``stored_files`` tables."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Record store %s failed", action)
            raise RecordStoreUnavailable(f"Record store {action} failed") from exc

    def _find(self, table_id: str, row_id: int) -> StoredRecord | None:
        try:
            return (
                self.db.query(StoredRecord)
                .filter(StoredRecord.table_id == str(table_id), StoredRecord.id == int(row_id))
                .first()
            )
        except SQLAlchemyError as exc:
            logger.exception("Record store read failed table=%s id=%s", table_id, row_id)
            raise RecordStoreUnavailable("Record store read failed") from exc

    def get_row(self, table_id: str, row_id: int) -> dict[str, Any] | None:
        record = self._find(table_id, row_id)
        return _row(record) if record else None

    def list_rows(self, table_id: str, filters: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        try:
            records = (
                self.db.query(StoredRecord)
                .filter(StoredRecord.table_id == str(table_id))
                .order_by(StoredRecord.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            logger.exception("Record store list failed table=%s", table_id)
            raise RecordStoreUnavailable("Record store list failed") from exc
        rows = [_row(r) for r in records]
        if filters:
            rows = [row for row in rows if _matches(row, filters)]
        return rows

    def insert_row(self, table_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        payload = {k: v for k, v in dict(data).items() if k != "id"}
        record = StoredRecord(table_id=str(table_id), data=payload)
        self.db.add(record)
        self._commit("insert")
        self.db.refresh(record)
        return _row(record)

    def update_row(self, table_id: str, row_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        record = self._find(table_id, row_id)
        if record is None:
            raise RecordNotFound(f"Row {row_id} not found in table {table_id}")
        merged = dict(record.data or {})
        merged.update({k: v for k, v in dict(data).items() if k != "id"})
        # JSON columns are not mutation-tracked; assign a new object
        record.data = merged
        self._commit("update")
        self.db.refresh(record)
        return _row(record)

    def delete_row(self, table_id: str, row_id: int) -> None:
        record = self._find(table_id, row_id)
        if record is None:
            raise RecordNotFound(f"Row {row_id} not found in table {table_id}")
        self.db.delete(record)
        self._commit("delete")

    def upload_file(self, content: bytes, filename: str, content_type: str | None = None) -> StoredFile:
        suffix = PurePath(filename or "").suffix.lower()
        name = f"{uuid.uuid4().hex}{suffix}"
        blob = StoredFileBlob(
            name=name,
            original_name=filename or name,
            content_type=content_type or mimetypes.guess_type(filename or "")[0] or "application/octet-stream",
            size_bytes=len(content),
            content=content,
        )
        self.db.add(blob)
        self._commit("upload")
        return {"name": name, "url": public_file_url(name)}

    def get_file(self, name: str) -> StoredFileBlob | None:
        return self.db.query(StoredFileBlob).filter(StoredFileBlob.name == name).first()
