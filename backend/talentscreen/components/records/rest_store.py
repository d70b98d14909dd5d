"""Baserow-style REST record store client."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

import httpx

from .store import LINK_HAS_SUFFIX, RecordNotFound, RecordStoreUnavailable, StoredFile

logger = logging.getLogger(__name__)

RATE_LIMIT_RETRY_AFTER_SEC = 2
MAX_LIST_PAGES = 500


def _filter_params(filters: Mapping[str, Any] | None) -> dict[str, str]:
    params: dict[str, str] = {}
    for key, value in (filters or {}).items():
        if key.endswith(LINK_HAS_SUFFIX):
            params[f"filter__{key[: -len(LINK_HAS_SUFFIX)]}__link_row_has"] = str(value)
        else:
            params[f"filter__{key}__equal"] = str(value)
    return params


class RestRecordStore:
    """RecordStore over the database rows API of a hosted table service."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 30.0,
        page_size: int = 200,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = {"Authorization": f"Token {token}"}
        self.timeout = timeout
        self.page_size = page_size
        self.transport = transport

    def _rows_path(self, table_id: str, row_id: int | None = None) -> str:
        path = f"/api/database/rows/table/{table_id}/"
        if row_id is not None:
            path += f"{int(row_id)}/"
        return path

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        files: Any = None,
    ) -> Any:
        url = path if path.startswith("http") else f"{self.base_url}{path}"
        for attempt in range(2):
            try:
                with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                    response = client.request(
                        method, url, json=json, params=params, files=files, headers=self.headers
                    )
                response.raise_for_status()
                return response.json() if response.content else {}
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                if status_code == 429 and attempt == 0:
                    logger.warning("Record store 429, waiting %ss then retry", RATE_LIMIT_RETRY_AFTER_SEC)
                    time.sleep(RATE_LIMIT_RETRY_AFTER_SEC)
                    continue
                if status_code == 404:
                    raise RecordNotFound(f"{method} {path} returned 404") from exc
                logger.error("Record store %s %s failed with status %s", method, path, status_code)
                raise RecordStoreUnavailable(f"Record store returned {status_code}") from exc
            except httpx.HTTPError as exc:
                logger.error("Record store %s %s failed: %s", method, path, exc)
                raise RecordStoreUnavailable("Record store unreachable") from exc
        raise RecordStoreUnavailable("Record store rate limited")

    def get_row(self, table_id: str, row_id: int) -> dict[str, Any] | None:
        try:
            return self._request("GET", self._rows_path(table_id, row_id), params={"user_field_names": "true"})
        except RecordNotFound:
            return None

    def list_rows(self, table_id: str, filters: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"user_field_names": "true", "size": str(self.page_size)}
        params.update(_filter_params(filters))
        rows: list[dict[str, Any]] = []
        payload = self._request("GET", self._rows_path(table_id), params=params)
        for _ in range(MAX_LIST_PAGES):
            results = payload.get("results") if isinstance(payload, dict) else None
            rows.extend(r for r in (results or []) if isinstance(r, dict))
            next_url = payload.get("next") if isinstance(payload, dict) else None
            if not isinstance(next_url, str) or not next_url.strip():
                break
            # ``next`` already carries the query string
            payload = self._request("GET", next_url.strip())
        return rows

    def insert_row(self, table_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        return self._request(
            "POST", self._rows_path(table_id), json=dict(data), params={"user_field_names": "true"}
        )

    def update_row(self, table_id: str, row_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        return self._request(
            "PATCH", self._rows_path(table_id, row_id), json=dict(data), params={"user_field_names": "true"}
        )

    def delete_row(self, table_id: str, row_id: int) -> None:
        self._request("DELETE", self._rows_path(table_id, row_id))

    def upload_file(self, content: bytes, filename: str, content_type: str | None = None) -> StoredFile:
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        payload = self._request("POST", "/api/user-files/upload-file/", files=files)
        return {"name": payload.get("name") or filename, "url": payload.get("url") or ""}
