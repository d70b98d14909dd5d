"""Record store contract shared by the SQL and REST backends.

Rows are plain dicts carrying an ``id`` plus the table's user-facing field
names. ``list_rows`` filters are keyed by field name; a key ending in
``__has`` matches link-row fields that contain the given id, any other key
is an equality match.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypedDict


class RecordStoreError(RuntimeError):
    """Base error for record store failures."""


class RecordStoreUnavailable(RecordStoreError):
    """The store could not be reached or rejected the request."""


class RecordNotFound(RecordStoreError):
    """The addressed row does not exist."""


class StoredFile(TypedDict):
    name: str
    url: str


LINK_HAS_SUFFIX = "__has"


class RecordStore(Protocol):
    def get_row(self, table_id: str, row_id: int) -> dict[str, Any] | None: ...

    def list_rows(
        self, table_id: str, filters: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]: ...

    def insert_row(self, table_id: str, data: Mapping[str, Any]) -> dict[str, Any]: ...

    def update_row(self, table_id: str, row_id: int, data: Mapping[str, Any]) -> dict[str, Any]: ...

    def delete_row(self, table_id: str, row_id: int) -> None: ...

    def upload_file(self, content: bytes, filename: str, content_type: str | None = None) -> StoredFile: ...
