from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..narrative.schemas import Narrative, try_parse_narrative
from ..taxonomy.scoring import ProfileScores
from .models import AssessmentResult


class AssessmentCreateResponse(BaseModel):
    success: bool = True
    link: str
    assessment_id: int
    token: str
    expires_on: date


class AssessmentTokenResponse(BaseModel):
    success: bool = True
    assessment_id: int
    adjectives: List[str]


class AssessmentSubmit(BaseModel):
    """Adjective selections per questionnaire step; ``step1..3`` are accepted as aliases."""

    model_config = ConfigDict(populate_by_name=True)

    passo1: List[str] = Field(default_factory=list, alias="step1", max_length=200)
    passo2: List[str] = Field(default_factory=list, alias="step2", max_length=200)
    passo3: List[str] = Field(default_factory=list, alias="step3", max_length=200)


class ProfileScoresResponse(BaseModel):
    executor: float
    comunicador: float
    planejador: float
    analista: float

    @classmethod
    def from_scores(cls, scores: ProfileScores) -> "ProfileScoresResponse":
        return cls(**scores.as_dict())


class AssessmentSubmitResponse(BaseModel):
    success: bool = True
    message: str
    scores: ProfileScoresResponse


class AssessmentResultResponse(BaseModel):
    id: int
    assessment_id: Optional[int] = None
    executor: float
    comunicador: float
    planejador: float
    analista: float
    respostas_passo1: Optional[str] = None
    respostas_passo2: Optional[str] = None
    respostas_passo3: Optional[str] = None
    analise_ia: Optional[str] = None
    narrative: Optional[Narrative] = None

    @classmethod
    def from_result(cls, result: AssessmentResult) -> "AssessmentResultResponse":
        step1, step2, step3 = result.steps
        return cls(
            id=result.id,
            assessment_id=result.assessment_id,
            executor=result.executor,
            comunicador=result.comunicador,
            planejador=result.planejador,
            analista=result.analista,
            respostas_passo1=step1,
            respostas_passo2=step2,
            respostas_passo3=step3,
            analise_ia=result.narrative_payload,
            narrative=try_parse_narrative(result.narrative_payload),
        )


class AssessmentResultEnvelope(BaseModel):
    success: bool = True
    result: AssessmentResultResponse
