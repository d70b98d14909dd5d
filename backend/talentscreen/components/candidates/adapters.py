"""Adapters from raw store rows to normalized records, one per intake table."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ...shared.utils import link_ids, select_value
from ..records import tables
from .models import (
    CandidateRecord,
    CandidateSource,
    CandidateStatus,
    JobLink,
    JobPosting,
    NoJobLink,
    ReferenceJobLink,
    ResumeFile,
    TitleJobLink,
)

logger = logging.getLogger(__name__)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_float(value: Any) -> float | None:
    # Decimal fields come back as strings ("87.50")
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _optional_int(value: Any) -> int | None:
    number = _optional_float(value)
    return int(number) if number is not None else None


def _status(value: Any) -> CandidateStatus | None:
    raw = select_value(value)
    if raw is None:
        return None
    try:
        return CandidateStatus(raw)
    except ValueError:
        logger.warning("Unknown candidate status %r", raw)
        return None


def _resumes(value: Any) -> tuple[ResumeFile, ...]:
    if not isinstance(value, list):
        return ()
    files = []
    for item in value:
        if isinstance(item, dict) and item.get("url"):
            files.append(ResumeFile(name=str(item.get("visible_name") or item.get("name") or ""), url=str(item["url"])))
    return tuple(files)


def parse_job_link(value: Any) -> JobLink:
    """Classify a raw ``vaga`` field into one of the three job link cases."""
    if isinstance(value, str):
        return TitleJobLink(title=value) if value.strip() else NoJobLink()
    if isinstance(value, list) and value:
        ids = link_ids(value[:1])
        if not ids:
            return NoJobLink()
        first = value[0]
        title = _optional_text(first.get("value")) if isinstance(first, dict) else None
        return ReferenceJobLink(job_id=ids[0], title=title)
    return NoJobLink()


def job_from_row(row: Mapping[str, Any]) -> JobPosting:
    return JobPosting(
        id=int(row["id"]),
        title=str(row.get(tables.JOB_TITLE) or ""),
        owner_ids=frozenset(link_ids(row.get(tables.JOB_OWNERS))),
        description=_optional_text(row.get(tables.JOB_DESCRIPTION)),
        address=_optional_text(row.get(tables.JOB_ADDRESS)),
        required_skills=_optional_text(row.get(tables.JOB_REQUIRED)),
        desired_skills=_optional_text(row.get(tables.JOB_DESIRED)),
    )


def _common_fields(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "phone": _optional_text(row.get(tables.CANDIDATE_PHONE)),
        "job_link": parse_job_link(row.get(tables.CANDIDATE_JOB)),
        "owner_ids": frozenset(link_ids(row.get(tables.CANDIDATE_OWNERS))),
        "score": _optional_float(row.get(tables.CANDIDATE_SCORE)),
        "ai_summary": _optional_text(row.get(tables.CANDIDATE_SUMMARY)),
        "behavioral_profile": _optional_text(row.get(tables.CANDIDATE_PROFILE)),
        "screened_at": _optional_text(row.get(tables.CANDIDATE_SCREENED_AT)),
        "gender": select_value(row.get("sexo")),
        "education": select_value(row.get("escolaridade")),
        "age": _optional_int(row.get("idade")),
    }


def candidate_from_upload_row(row: Mapping[str, Any]) -> CandidateRecord:
    """Candidate created from a résumé upload: linked job reference, owner set at intake."""
    return CandidateRecord(
        source=CandidateSource.UPLOAD,
        name=_optional_text(row.get(tables.CANDIDATE_NAME)) or "Novo Candidato",
        status=_status(row.get(tables.CANDIDATE_STATUS)),
        resumes=_resumes(row.get(tables.CANDIDATE_RESUME)),
        **_common_fields(row),
    )


def candidate_from_chat_row(row: Mapping[str, Any]) -> CandidateRecord:
    """Candidate collected by the chat channel.

    Chat intake usually carries the job as typed by the candidate and no
    owner; an unset status means the candidate is still in screening.
    """
    return CandidateRecord(
        source=CandidateSource.CHAT,
        name=_optional_text(row.get(tables.CANDIDATE_NAME)) or "",
        status=_status(row.get(tables.CANDIDATE_STATUS)) or CandidateStatus.SCREENING,
        resumes=_resumes(row.get(tables.CANDIDATE_RESUME)),
        **_common_fields(row),
    )
