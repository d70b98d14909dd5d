from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from .deps import get_record_store
from .sql_store import SqlRecordStore
from .store import RecordStore

router = APIRouter(prefix="/files", tags=["Files"])


@router.get("/{name}")
def download_file(name: str, store: RecordStore = Depends(get_record_store)):
    """Serve a file uploaded to the built-in record store."""
    if not isinstance(store, SqlRecordStore):
        raise HTTPException(status_code=404, detail="File not found")
    blob = store.get_file(name)
    if blob is None:
        raise HTTPException(status_code=404, detail="File not found")
    return Response(
        content=blob.content,
        media_type=blob.content_type or "application/octet-stream",
        headers={"Content-Disposition": f"inline; filename*=UTF-8''{quote(blob.original_name)}"},
    )
