from __future__ import annotations

import enum
import unicodedata
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).strip().lower()


class AssessmentStatus(str, enum.Enum):
    PENDING = "Pendente"
    COMPLETED = "Concluído"

    @classmethod
    def coerce(cls, value: Any) -> "AssessmentStatus":
        """Stored status to enum; anything not recognisably completed is pending."""
        if isinstance(value, AssessmentStatus):
            return value
        if isinstance(value, str) and _fold(value) in {"concluido", "completed"}:
            return cls.COMPLETED
        return cls.PENDING


@dataclass(frozen=True)
class Assessment:
    id: int
    token: str
    status: AssessmentStatus
    candidate_id: Optional[int] = None
    expires_on: Optional[date] = None

    def is_expired(self, today: date | None = None) -> bool:
        if self.expires_on is None:
            return False
        return (today or date.today()) > self.expires_on

    def is_open(self, today: date | None = None) -> bool:
        return self.status is AssessmentStatus.PENDING and not self.is_expired(today)


@dataclass(frozen=True)
class AssessmentResult:
    id: int
    assessment_id: Optional[int]
    executor: float = 0.0
    comunicador: float = 0.0
    planejador: float = 0.0
    analista: float = 0.0
    steps: tuple[Optional[str], Optional[str], Optional[str]] = (None, None, None)
    narrative_payload: Optional[str] = None
