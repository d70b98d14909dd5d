from typing import List, Optional

from pydantic import BaseModel, Field

from .models import (
    CandidateSource,
    CandidateStatus,
    JobPosting,
    ReconciledCandidate,
)


class JobLinkResponse(BaseModel):
    id: int
    title: str


class ResumeFileResponse(BaseModel):
    name: str
    url: str


class JobResponse(BaseModel):
    id: int
    title: str
    owner_ids: List[int] = []
    description: Optional[str] = None
    address: Optional[str] = None
    required_skills: Optional[str] = None
    desired_skills: Optional[str] = None

    @classmethod
    def from_job(cls, job: JobPosting) -> "JobResponse":
        return cls(
            id=job.id,
            title=job.title,
            owner_ids=sorted(job.owner_ids),
            description=job.description,
            address=job.address,
            required_skills=job.required_skills,
            desired_skills=job.desired_skills,
        )


class CandidateResponse(BaseModel):
    id: int
    source: CandidateSource
    name: str
    phone: Optional[str] = None
    job: Optional[JobLinkResponse] = None
    score: Optional[float] = None
    ai_summary: Optional[str] = None
    status: Optional[CandidateStatus] = None
    behavioral_profile: Optional[str] = None
    screened_at: Optional[str] = None
    gender: Optional[str] = None
    education: Optional[str] = None
    age: Optional[int] = None
    resumes: List[ResumeFileResponse] = []

    @classmethod
    def from_reconciled(cls, item: ReconciledCandidate) -> "CandidateResponse":
        record = item.record
        return cls(
            id=record.id,
            source=record.source,
            name=record.name,
            phone=record.phone,
            job=JobLinkResponse(id=item.job.job_id, title=item.job.title) if item.job else None,
            score=record.score,
            ai_summary=record.ai_summary,
            status=record.status,
            behavioral_profile=record.behavioral_profile,
            screened_at=record.screened_at,
            gender=record.gender,
            education=record.education,
            age=record.age,
            resumes=[ResumeFileResponse(name=f.name, url=f.url) for f in record.resumes],
        )


class ReconciledDataResponse(BaseModel):
    jobs: List[JobResponse]
    candidates: List[CandidateResponse]


class DashboardStatsResponse(BaseModel):
    active_jobs: int
    total_candidates: int
    average_score: int
    approved_candidates: int


class CandidateStatusUpdate(BaseModel):
    status: CandidateStatus
    source: CandidateSource = CandidateSource.UPLOAD


class CandidateStatusResponse(BaseModel):
    id: int
    status: CandidateStatus


class ResumeUploadResponse(BaseModel):
    success: bool
    message: str
    candidate_ids: List[int] = Field(default_factory=list)
