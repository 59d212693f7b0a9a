"""
Job Routes

GET /jobs - List jobs (newest first), annotated with eligibility for the caller
GET /jobs/{job_id} - Get job details
POST /jobs - Create job posting (admin only)
PATCH /jobs/{job_id} - Update job (admin only)
DELETE /jobs/{job_id} - Delete job (admin only)
"""

from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.api.routes.profile_routes import get_profile_for
from portal.core.auth import Identity, get_current_user, require_admin
from portal.db.database import get_db
from portal.models import Job, JobApplication, StudentProfile
from portal.schemas.schemas import JobCreate, JobResponse, JobUpdate, MessageResponse
from portal.services.eligibility import is_eligible

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = structlog.get_logger(__name__)


def get_job_or_404(db: Session, job_id: str) -> Job:
    job = db.get(Job, job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


def to_job_response(
    job: Job,
    user: Identity,
    profile: Optional[StudentProfile],
    applied_job_ids: set,
) -> JobResponse:
    """Serialize a job with the caller-specific flags (eligibility only applies to students)."""
    response = JobResponse.model_validate(job)
    if user.role == "student":
        response.is_eligible = is_eligible(profile, job)
    response.has_applied = job.id in applied_job_ids
    return response


def applied_job_ids_for(db: Session, user_id: str) -> set:
    return set(db.scalars(select(JobApplication.job_id).where(JobApplication.student_id == user_id)))


@router.get("", response_model=List[JobResponse])
def list_jobs(
    eligible_only: bool = Query(False, description="Only jobs the caller is eligible for"),
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List all job postings, newest first."""
    jobs = db.scalars(select(Job).order_by(Job.posted_at.desc())).all()
    profile = get_profile_for(db, user.user_id)
    applied = applied_job_ids_for(db, user.user_id)

    results = [to_job_response(job, user, profile, applied) for job in jobs]
    if eligible_only:
        results = [r for r in results if r.is_eligible]
    return results


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str, user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get details of a specific job."""
    job = get_job_or_404(db, job_id)
    profile = get_profile_for(db, user.user_id)
    return to_job_response(job, user, profile, applied_job_ids_for(db, user.user_id))


@router.post("", response_model=JobResponse, status_code=201)
def create_job(job: JobCreate, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    """Create a new job posting. Only admins can create jobs."""
    row = Job(**job.model_dump(), posted_by=admin.user_id)
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info("job_created", job_id=row.id, company=row.company_name, admin_id=admin.user_id)
    return JobResponse.model_validate(row)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    update: JobUpdate,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Update a job posting. Only provided fields are updated."""
    job = get_job_or_404(db, job_id)

    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(job, field, value)
    db.commit()
    db.refresh(job)

    logger.info("job_updated", job_id=job_id, fields=sorted(changes), admin_id=admin.user_id)
    return JobResponse.model_validate(job)


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(job_id: str, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    """Delete a job posting. Cascades to applications."""
    job = get_job_or_404(db, job_id)
    db.delete(job)
    db.commit()

    logger.info("job_deleted", job_id=job_id, admin_id=admin.user_id)
    return MessageResponse(message="Job deleted successfully")
