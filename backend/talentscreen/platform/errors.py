"""JSON error responses shared by every router."""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..components.records.store import RecordNotFound, RecordStoreUnavailable

logger = logging.getLogger("talentscreen.errors")

STORE_UNAVAILABLE_DETAIL = "The record store is temporarily unavailable. Please try again."


def _safe_errors(errors) -> list:
    # ctx may carry exception instances or bytes from the raw body
    return jsonable_encoder(errors, custom_encoder={bytes: lambda b: b.decode("utf-8", errors="replace")})


async def _on_validation_error(request: Request, exc: RequestValidationError):
    logger.warning("422 on %s %s: %s", request.method, request.url.path, exc.errors())
    try:
        detail = _safe_errors(exc.errors())
    except (TypeError, ValueError):
        detail = [{"msg": str(err.get("msg", err))} for err in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": detail})


async def _on_http_error(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


async def _on_store_unavailable(request: Request, exc: RecordStoreUnavailable):
    logger.error("Record store unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": STORE_UNAVAILABLE_DETAIL})


async def _on_record_not_found(request: Request, exc: RecordNotFound):
    return JSONResponse(status_code=404, content={"detail": "Record not found"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _on_validation_error)
    app.add_exception_handler(HTTPException, _on_http_error)
    app.add_exception_handler(RecordStoreUnavailable, _on_store_unavailable)
    app.add_exception_handler(RecordNotFound, _on_record_not_found)
