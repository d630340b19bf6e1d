import logging
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin
from app.core.permissions import Principal
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.schemas.job import JobCreateRequest, JobDeleteResponse, JobFilter, JobResponse, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: Principal = Depends(ensure_admin),
):
    """
    Create a job posting for an existing company.

    Authorization required: admin
    """
    if not company_crud.get_by_handle(db, request.company_handle):
        raise HTTPException(status_code=400, detail=f"No company: {request.company_handle}")

    new_job = job_crud.create(db, request)
    logger.info(f"Created job {new_job.id}: {new_job.title} at {new_job.company_handle}")
    return new_job


@router.get("/", response_model=List[JobResponse])
def list_jobs(
    title: Optional[str] = Query(None, min_length=1),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    max_salary: Optional[int] = Query(None, alias="maxSalary", ge=0),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by title.

    Can filter on:
    - title: case-insensitive partial match
    - minSalary / maxSalary: salary range (min must not exceed max)

    Authorization required: none
    """
    filters = JobFilter(title=title, min_salary=min_salary, max_salary=max_salary).to_filters()
    return job_crud.get_multi(db, filters)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.
    """
    job = job_crud.get_by_id(db, job_id)

    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return job


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: Principal = Depends(ensure_admin),
):
    """
    Partially update a job: any of title, salary, equity.

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.changes())

    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return job


@router.delete("/{job_id}", response_model=JobDeleteResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: Principal = Depends(ensure_admin),
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    deleted = job_crud.delete(db, job_id)

    if not deleted:
        raise HTTPException(status_code=404, detail="Job not found")

    logger.info(f"Deleted job {job_id}")
    return JobDeleteResponse(deleted=job_id)
