"""User-scoped view of jobs and candidates with job links resolved.

Candidates arrive from two intake tables with three possible job link
shapes. A candidate is visible to a user when the user owns it, or when its
job link points (by legacy free-text title or by reference) at one of the
user's jobs. Every visible candidate ends up with at most one resolved link,
always carrying the job's current title.

Known limitation: when a user owns two jobs with the same normalized title,
a free-text link resolves to the job indexed last.
"""

from __future__ import annotations

from typing import Iterable

from ...shared.utils import normalize_title
from .models import (
    CandidateRecord,
    JobPosting,
    ReconciledCandidate,
    ReconciledView,
    ReferenceJobLink,
    ResolvedJobLink,
    TitleJobLink,
)


class JobIndex:
    """Lookup of a user's jobs by normalized title and by id."""

    def __init__(self, jobs: Iterable[JobPosting]):
        self.by_title: dict[str, JobPosting] = {}
        self.by_id: dict[int, JobPosting] = {}
        for job in jobs:
            # Later entries replace earlier ones on a title collision
            self.by_title[normalize_title(job.title)] = job
            self.by_id[job.id] = job

    def match_title(self, title: str) -> JobPosting | None:
        key = normalize_title(title)
        if not key:
            return None
        return self.by_title.get(key)

    def match_id(self, job_id: int) -> JobPosting | None:
        return self.by_id.get(job_id)


def is_visible_to(candidate: CandidateRecord, user_id: int, index: JobIndex) -> bool:
    if candidate.is_owned_by(user_id):
        return True
    link = candidate.job_link
    if isinstance(link, TitleJobLink):
        return index.match_title(link.title) is not None
    if isinstance(link, ReferenceJobLink):
        return index.match_id(link.job_id) is not None
    return False


def resolve_job_link(candidate: CandidateRecord, index: JobIndex) -> ResolvedJobLink | None:
    link = candidate.job_link
    job: JobPosting | None = None
    if isinstance(link, TitleJobLink):
        job = index.match_title(link.title)
    elif isinstance(link, ReferenceJobLink):
        job = index.match_id(link.job_id)
    if job is None:
        return None
    return ResolvedJobLink(job_id=job.id, title=job.title)


def reconcile_for_user(
    jobs: Iterable[JobPosting],
    candidates: Iterable[CandidateRecord],
    user_id: int,
) -> ReconciledView:
    user_jobs = [job for job in jobs if job.is_owned_by(user_id)]
    index = JobIndex(user_jobs)
    reconciled = [
        ReconciledCandidate(record=candidate, job=resolve_job_link(candidate, index))
        for candidate in candidates
        if is_visible_to(candidate, user_id, index)
    ]
    return ReconciledView(jobs=user_jobs, candidates=reconciled)
