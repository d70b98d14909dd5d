"""Candidate business logic: reconciled views, dashboard stats, intake, status."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date

from fastapi import HTTPException

from ...platform.config import settings
from ..records import tables
from ..records.store import RecordNotFound, RecordStore
from .adapters import candidate_from_chat_row, candidate_from_upload_row, job_from_row
from .models import CandidateSource, CandidateStatus, ReconciledView
from .reconciler import reconcile_for_user

logger = logging.getLogger(__name__)

APPROVED_SCORE_THRESHOLD = 90


@dataclass(frozen=True)
class ResumeUpload:
    filename: str
    content: bytes
    content_type: str | None = None


def candidate_table_for(source: CandidateSource) -> str:
    if source is CandidateSource.CHAT:
        return tables.chat_candidates_table()
    return tables.candidates_table()


def load_reconciled_view(store: RecordStore, user_id: int) -> ReconciledView:
    """Fetch jobs and both candidate tables, then reconcile for ``user_id``.

    Any store failure propagates; there is no partial view.
    """
    job_rows = store.list_rows(tables.jobs_table())
    upload_rows = store.list_rows(tables.candidates_table())
    chat_rows = store.list_rows(tables.chat_candidates_table())

    jobs = [job_from_row(row) for row in job_rows]
    candidates = [candidate_from_upload_row(row) for row in upload_rows]
    candidates.extend(candidate_from_chat_row(row) for row in chat_rows)

    view = reconcile_for_user(jobs, candidates, user_id)
    logger.info(
        "Reconciled view user_id=%s jobs=%d candidates=%d (of %d)",
        user_id,
        len(view.jobs),
        len(view.candidates),
        len(candidates),
        extra={"user_id": user_id},
    )
    return view


def compute_dashboard_stats(view: ReconciledView) -> dict:
    """Headline numbers over candidates attached to one of the user's jobs."""
    active_job_ids = {job.id for job in view.jobs}
    active = [c for c in view.candidates if c.job is not None and c.job.job_id in active_job_ids]
    approved = [c for c in active if c.record.score is not None and c.record.score >= APPROVED_SCORE_THRESHOLD]
    average = 0
    if active:
        # Halves round up
        average = math.floor(sum(c.record.score or 0 for c in active) / len(active) + 0.5)
    return {
        "active_jobs": len(view.jobs),
        "total_candidates": len(active),
        "average_score": int(average),
        "approved_candidates": len(approved),
    }


def update_candidate_status(
    store: RecordStore,
    candidate_id: int,
    status: CandidateStatus,
    source: CandidateSource = CandidateSource.UPLOAD,
) -> dict:
    try:
        row = store.update_row(
            candidate_table_for(source), candidate_id, {tables.CANDIDATE_STATUS: status.value}
        )
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Candidate not found")
    logger.info("Candidate status updated candidate_id=%s status=%s", candidate_id, status.value)
    return row


def _candidate_name_from_filename(filename: str) -> str:
    return (filename or "").split(".")[0].strip() or "Novo Candidato"


def upload_resumes(store: RecordStore, job_id: int, user_id: int, uploads: list[ResumeUpload]) -> list[dict]:
    """Store each résumé and create one Screening candidate per file.

    Every file is size-checked before anything is written.
    """
    if not uploads:
        raise HTTPException(status_code=400, detail="At least one résumé file is required")
    limit = settings.MAX_RESUME_UPLOAD_BYTES
    for upload in uploads:
        if len(upload.content) > limit:
            raise HTTPException(
                status_code=400,
                detail=f"File '{upload.filename}' is too large. The limit is {limit // (1024 * 1024)}MB.",
            )

    created: list[dict] = []
    for upload in uploads:
        stored = store.upload_file(upload.content, upload.filename, upload.content_type)
        row = store.insert_row(
            tables.candidates_table(),
            {
                tables.CANDIDATE_NAME: _candidate_name_from_filename(upload.filename),
                tables.CANDIDATE_RESUME: [{"name": stored["name"], "url": stored["url"]}],
                tables.CANDIDATE_OWNERS: [user_id],
                tables.CANDIDATE_JOB: [job_id],
                tables.CANDIDATE_SCORE: None,
                tables.CANDIDATE_SUMMARY: None,
                tables.CANDIDATE_STATUS: CandidateStatus.SCREENING.value,
                tables.CANDIDATE_SCREENED_AT: date.today().isoformat(),
            },
        )
        created.append(row)
    logger.info("Résumés uploaded job_id=%s user_id=%s count=%d", job_id, user_id, len(created))
    return created
