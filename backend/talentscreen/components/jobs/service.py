"""Job posting writes against the record store."""

from __future__ import annotations

import logging

from fastapi import HTTPException

from ..candidates.adapters import job_from_row
from ..candidates.models import JobPosting
from ..records import tables
from ..records.store import RecordNotFound, RecordStore
from .schemas import JobCreate, JobUpdate

logger = logging.getLogger(__name__)

_FIELD_MAP = {
    "title": tables.JOB_TITLE,
    "description": tables.JOB_DESCRIPTION,
    "address": tables.JOB_ADDRESS,
    "required_skills": tables.JOB_REQUIRED,
    "desired_skills": tables.JOB_DESIRED,
    "owner_ids": tables.JOB_OWNERS,
}


def _to_row(values: dict) -> dict:
    return {_FIELD_MAP[key]: value for key, value in values.items() if key in _FIELD_MAP}


def create_job(store: RecordStore, data: JobCreate) -> JobPosting:
    row = store.insert_row(tables.jobs_table(), _to_row(data.model_dump()))
    logger.info("Job created job_id=%s", row.get("id"))
    return job_from_row(row)


def update_job(store: RecordStore, job_id: int, data: JobUpdate) -> JobPosting:
    values = data.model_dump(exclude_unset=True)
    if not values:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        row = store.update_row(tables.jobs_table(), job_id, _to_row(values))
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Job not found")
    return job_from_row(row)


def delete_job(store: RecordStore, job_id: int) -> None:
    try:
        store.delete_row(tables.jobs_table(), job_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Job not found")
    logger.info("Job deleted job_id=%s", job_id)
