from typing import Optional

from fastapi import APIRouter, Depends, Path, status

from ..narrative.service import NarrativeAnalysisClient, get_narrative_client
from ..records.deps import get_record_store
from ..records.store import RecordStore
from .schemas import (
    AssessmentCreateResponse,
    AssessmentResultEnvelope,
    AssessmentResultResponse,
    AssessmentSubmit,
    AssessmentSubmitResponse,
    AssessmentTokenResponse,
    ProfileScoresResponse,
)
from .service import (
    create_assessment,
    get_candidate_behavioral_profile,
    get_open_assessment_by_token,
    get_result,
    questionnaire_adjectives,
    submit_assessment,
)

router = APIRouter(prefix="/assessment", tags=["Assessments"])
candidate_router = APIRouter(prefix="/candidates", tags=["Candidates"])


@candidate_router.post(
    "/{candidate_id}/create-assessment",
    response_model=AssessmentCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
def post_create_assessment(candidate_id: int = Path(..., gt=0), store: RecordStore = Depends(get_record_store)):
    issued = create_assessment(store, candidate_id)
    return AssessmentCreateResponse(
        link=issued.link,
        assessment_id=issued.assessment.id,
        token=issued.assessment.token,
        expires_on=issued.assessment.expires_on,
    )


@candidate_router.get("/{candidate_id}/behavioral-profile", response_model=Optional[AssessmentResultResponse])
def get_behavioral_profile(candidate_id: int, store: RecordStore = Depends(get_record_store)):
    result = get_candidate_behavioral_profile(store, candidate_id)
    return AssessmentResultResponse.from_result(result) if result else None


# Declared before "/{token}" so "result" is never taken for a token
@router.get("/result/{assessment_id}", response_model=AssessmentResultEnvelope)
def get_assessment_result(assessment_id: int, store: RecordStore = Depends(get_record_store)):
    return AssessmentResultEnvelope(result=AssessmentResultResponse.from_result(get_result(store, assessment_id)))


@router.get("/{token}", response_model=AssessmentTokenResponse)
def get_assessment_by_token(token: str, store: RecordStore = Depends(get_record_store)):
    assessment = get_open_assessment_by_token(store, token)
    return AssessmentTokenResponse(assessment_id=assessment.id, adjectives=questionnaire_adjectives())


@router.post("/{assessment_id}/submit", response_model=AssessmentSubmitResponse)
def post_submit_assessment(
    assessment_id: int,
    data: AssessmentSubmit,
    store: RecordStore = Depends(get_record_store),
    narrative_client: NarrativeAnalysisClient = Depends(get_narrative_client),
):
    outcome = submit_assessment(store, narrative_client, assessment_id, data.passo1, data.passo2, data.passo3)
    return AssessmentSubmitResponse(
        message="Assessment submitted successfully.",
        scores=ProfileScoresResponse.from_scores(outcome.scores),
    )
