"""
Application Routes

GET /applications/my - Get my applications (newest first)
POST /applications - Apply to a job
"""

from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.api.routes.job_routes import get_job_or_404
from portal.api.routes.profile_routes import get_profile_for
from portal.core.auth import Identity, get_current_user
from portal.db.database import get_db
from portal.models import Job, JobApplication
from portal.schemas.schemas import ApplicationCreate, ApplicationResponse, MyApplicationResponse
from portal.services.eligibility import is_eligible

router = APIRouter(prefix="/applications", tags=["Applications"])
logger = structlog.get_logger(__name__)


def has_applied(db: Session, job_id: str, student_id: str) -> bool:
    return db.scalar(
        select(JobApplication.id).where(
            JobApplication.job_id == job_id, JobApplication.student_id == student_id
        )
    ) is not None


def list_applications_for(db: Session, student_id: str, limit: Optional[int] = None) -> List[MyApplicationResponse]:
    query = (
        select(JobApplication, Job.title, Job.company_name)
        .join(Job, JobApplication.job_id == Job.id)
        .where(JobApplication.student_id == student_id)
        .order_by(JobApplication.applied_at.desc())
    )
    if limit is not None:
        query = query.limit(limit)

    return [
        MyApplicationResponse(
            id=app.id, job_id=app.job_id, student_id=app.student_id,
            applied_at=app.applied_at, status=app.status,
            job_title=title, company_name=company_name,
        )
        for app, title, company_name in db.execute(query).all()
    ]


@router.get("/my", response_model=List[MyApplicationResponse])
def get_my_applications(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get all job applications for current user."""
    return list_applications_for(db, user.user_id)


@router.post("", response_model=ApplicationResponse, status_code=201)
def apply_to_job(
    application: ApplicationCreate,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Apply to a job.

    Checks, in order: job exists, caller is eligible, not already applied.
    The (job_id, student_id) unique constraint backs the "already applied"
    check when two requests race past it.
    """
    job = get_job_or_404(db, application.job_id)

    if not is_eligible(get_profile_for(db, user.user_id), job):
        raise HTTPException(status_code=403, detail="Not eligible for this job")

    if has_applied(db, job.id, user.user_id):
        raise HTTPException(status_code=409, detail="Already applied to this job")

    row = JobApplication(job_id=job.id, student_id=user.user_id)
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("duplicate_application_blocked", job_id=job.id, student_id=user.user_id)
        raise HTTPException(status_code=409, detail="Already applied to this job")
    db.refresh(row)

    logger.info("application_created", application_id=row.id, job_id=job.id, student_id=user.user_id)
    return row
