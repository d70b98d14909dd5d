"""Normalized job and candidate records, independent of the intake table."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union


class CandidateStatus(str, enum.Enum):
    SCREENING = "Triagem"
    INTERVIEW = "Entrevista"
    APPROVED = "Aprovado"
    REJECTED = "Reprovado"


class CandidateSource(str, enum.Enum):
    UPLOAD = "upload"
    CHAT = "chat"


@dataclass(frozen=True)
class JobPosting:
    id: int
    title: str
    owner_ids: frozenset[int] = frozenset()
    description: Optional[str] = None
    address: Optional[str] = None
    required_skills: Optional[str] = None
    desired_skills: Optional[str] = None

    def is_owned_by(self, user_id: int) -> bool:
        return user_id in self.owner_ids


# Job link as stored on a candidate row: one of three named cases.

@dataclass(frozen=True)
class NoJobLink:
    pass


@dataclass(frozen=True)
class TitleJobLink:
    """Legacy free-text job title, from before job references existed."""

    title: str


@dataclass(frozen=True)
class ReferenceJobLink:
    job_id: int
    title: Optional[str] = None  # as denormalized on the candidate row; may be stale


JobLink = Union[NoJobLink, TitleJobLink, ReferenceJobLink]


@dataclass(frozen=True)
class ResolvedJobLink:
    job_id: int
    title: str


@dataclass(frozen=True)
class ResumeFile:
    name: str
    url: str


@dataclass(frozen=True)
class CandidateRecord:
    id: int
    source: CandidateSource
    name: str
    phone: Optional[str] = None
    job_link: JobLink = NoJobLink()
    owner_ids: frozenset[int] = frozenset()
    score: Optional[float] = None
    ai_summary: Optional[str] = None
    status: Optional[CandidateStatus] = None
    behavioral_profile: Optional[str] = None
    screened_at: Optional[str] = None
    gender: Optional[str] = None
    education: Optional[str] = None
    age: Optional[int] = None
    resumes: tuple[ResumeFile, ...] = ()

    def is_owned_by(self, user_id: int) -> bool:
        return user_id in self.owner_ids


@dataclass(frozen=True)
class ReconciledCandidate:
    record: CandidateRecord
    job: Optional[ResolvedJobLink] = None


@dataclass
class ReconciledView:
    jobs: list[JobPosting] = field(default_factory=list)
    candidates: list[ReconciledCandidate] = field(default_factory=list)
