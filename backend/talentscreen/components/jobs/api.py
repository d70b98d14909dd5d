from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from ..candidates.schemas import JobResponse
from ..records.deps import get_record_store
from ..records.store import RecordStore
from .schemas import JobCreate, JobUpdate
from .service import create_job, delete_job, update_job

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def post_job(data: JobCreate, store: RecordStore = Depends(get_record_store)):
    return JobResponse.from_job(create_job(store, data))


@router.patch("/{job_id}", response_model=JobResponse)
def patch_job(job_id: int, data: JobUpdate, store: RecordStore = Depends(get_record_store)):
    return JobResponse.from_job(update_job(store, job_id, data))


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_job(job_id: int, store: RecordStore = Depends(get_record_store)):
    delete_job(store, job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
