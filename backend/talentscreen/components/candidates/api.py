from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from ..records.deps import get_record_store
from ..records.store import RecordStore
from .schemas import (
    CandidateResponse,
    CandidateStatusResponse,
    CandidateStatusUpdate,
    DashboardStatsResponse,
    JobResponse,
    ReconciledDataResponse,
    ResumeUploadResponse,
)
from .service import (
    ResumeUpload,
    compute_dashboard_stats,
    load_reconciled_view,
    update_candidate_status,
    upload_resumes,
)

data_router = APIRouter(prefix="/data", tags=["Data"])
router = APIRouter(prefix="/candidates", tags=["Candidates"])


@data_router.get("/all/{user_id}", response_model=ReconciledDataResponse)
def get_reconciled_data(user_id: int, store: RecordStore = Depends(get_record_store)):
    view = load_reconciled_view(store, user_id)
    return ReconciledDataResponse(
        jobs=[JobResponse.from_job(job) for job in view.jobs],
        candidates=[CandidateResponse.from_reconciled(c) for c in view.candidates],
    )


@data_router.get("/stats/{user_id}", response_model=DashboardStatsResponse)
def get_dashboard_stats(user_id: int, store: RecordStore = Depends(get_record_store)):
    view = load_reconciled_view(store, user_id)
    return DashboardStatsResponse(**compute_dashboard_stats(view))


@router.patch("/{candidate_id}/status", response_model=CandidateStatusResponse)
def patch_candidate_status(
    candidate_id: int,
    data: CandidateStatusUpdate,
    store: RecordStore = Depends(get_record_store),
):
    update_candidate_status(store, candidate_id, data.status, data.source)
    return CandidateStatusResponse(id=candidate_id, status=data.status)


@router.post("/upload-resumes", response_model=ResumeUploadResponse, status_code=status.HTTP_201_CREATED)
def post_resumes(
    job_id: int = Form(..., gt=0),
    user_id: int = Form(..., gt=0),
    files: List[UploadFile] = File(...),
    store: RecordStore = Depends(get_record_store),
):
    uploads = [
        ResumeUpload(filename=f.filename or "", content=f.file.read(), content_type=f.content_type)
        for f in files
    ]
    created = upload_resumes(store, job_id, user_id, uploads)
    return ResumeUploadResponse(
        success=True,
        message=f"{len(created)} résumé(s) sent for screening.",
        candidate_ids=[int(row["id"]) for row in created],
    )
