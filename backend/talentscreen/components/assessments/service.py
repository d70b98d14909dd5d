"""Assessment business logic: issue, token lookup, submission, results."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from fastapi import HTTPException

from ...platform.config import settings
from ..narrative.service import NarrativeAnalysisClient
from ..records import tables
from ..records.store import RecordStore, RecordStoreError
from ..taxonomy.scoring import ProfileScores, calculate_profile_scores, selected_adjectives
from ..taxonomy.taxonomy import get_taxonomy
from . import repository
from .models import Assessment, AssessmentResult

logger = logging.getLogger(__name__)

# Same message for unknown, completed and expired tokens
ASSESSMENT_NOT_FOUND = "Assessment not found or expired"


@dataclass(frozen=True)
class IssuedAssessment:
    assessment: Assessment
    link: str


@dataclass(frozen=True)
class SubmissionOutcome:
    assessment: Assessment
    scores: ProfileScores
    result: AssessmentResult


def assessment_link(token: str) -> str:
    return f"{settings.ASSESSMENT_PUBLIC_BASE_URL.rstrip('/')}/assessment/{token}"


def create_assessment(store: RecordStore, candidate_id: int, today: date | None = None) -> IssuedAssessment:
    token = secrets.token_urlsafe(32)
    expires_on = (today or date.today()) + timedelta(days=settings.ASSESSMENT_EXPIRY_DAYS)
    assessment = repository.insert_assessment(store, candidate_id, token, expires_on)
    logger.info(
        "Assessment issued assessment_id=%s candidate_id=%s expires_on=%s",
        assessment.id,
        candidate_id,
        expires_on.isoformat(),
        extra={"assessment_id": assessment.id, "candidate_id": candidate_id},
    )
    return IssuedAssessment(assessment=assessment, link=assessment_link(token))


def get_open_assessment_by_token(store: RecordStore, token: str, today: date | None = None) -> Assessment:
    """Pending, unexpired assessment for ``token``; 404 otherwise."""
    assessment = repository.find_assessment_by_token(store, token)
    if assessment is None or not assessment.is_open(today):
        raise HTTPException(status_code=404, detail=ASSESSMENT_NOT_FOUND)
    return assessment


def questionnaire_adjectives() -> list[str]:
    return list(get_taxonomy().adjectives)


def _apply_behavioral_profile(store: RecordStore, candidate_id: Optional[int], profile: str) -> None:
    if candidate_id is None:
        logger.warning("Assessment has no candidate; behavioral profile not propagated")
        return
    try:
        store.update_row(tables.candidates_table(), candidate_id, {tables.CANDIDATE_PROFILE: profile})
    except RecordStoreError as exc:
        # Result is already persisted; the profile copy is an enrichment
        logger.warning("Could not update behavioral profile candidate_id=%s: %s", candidate_id, exc)


def submit_assessment(
    store: RecordStore,
    narrative_client: NarrativeAnalysisClient,
    assessment_id: int,
    step1: list[str],
    step2: list[str],
    step3: list[str],
    today: date | None = None,
) -> SubmissionOutcome:
    """Score a submission, enrich it with a narrative and persist the result.

    The stored assessment must be Pending, unexpired and without a result.
    The narrative never blocks the submission: on provider failure the
    result is stored without one.
    """
    assessment = repository.get_assessment(store, assessment_id)
    if assessment is None or assessment.is_expired(today):
        raise HTTPException(status_code=404, detail=ASSESSMENT_NOT_FOUND)
    if not assessment.is_open(today):
        raise HTTPException(status_code=409, detail="Assessment already completed")
    if repository.find_result_row(store, assessment_id) is not None:
        logger.warning("Result already stored for pending assessment_id=%s", assessment_id)
        raise HTTPException(status_code=409, detail="Assessment already completed")

    scores = calculate_profile_scores(step1, step2, step3)
    outcome = narrative_client.analyze(scores, selected_adjectives(step1, step2, step3))

    row = repository.insert_result(store, assessment_id, scores, (step1, step2, step3), outcome.payload)
    completed = repository.mark_assessment_completed(store, assessment_id)

    if outcome.narrative is not None:
        _apply_behavioral_profile(store, assessment.candidate_id, outcome.narrative.perfil_principal)
    elif outcome.payload is not None:
        logger.warning("Stored unparsable narrative for assessment_id=%s", assessment_id)

    logger.info(
        "Assessment submitted assessment_id=%s provider=%s scores=%s",
        assessment_id,
        outcome.provider,
        scores.as_dict(),
        extra={"assessment_id": assessment_id, "provider": outcome.provider},
    )
    return SubmissionOutcome(assessment=completed, scores=scores, result=repository.result_from_row(row))


def get_result(store: RecordStore, assessment_id: int) -> AssessmentResult:
    row = repository.find_result_row(store, assessment_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Result not found")
    return repository.result_from_row(row)


def get_candidate_behavioral_profile(store: RecordStore, candidate_id: int) -> Optional[AssessmentResult]:
    """Result of the candidate's first assessment, if it has one."""
    assessments = repository.list_candidate_assessments(store, candidate_id)
    if not assessments:
        return None
    row = repository.find_result_row(store, assessments[0].id)
    return repository.result_from_row(row) if row else None
