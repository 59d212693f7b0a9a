"""
Profile Routes

GET /profile - Get own student profile (null if none yet)
PATCH /profile - Create or update own profile
POST /profile/resume - Upload resume (PDF, max 10MB)
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from portal.core.auth import Identity, get_current_user
from portal.db.database import get_db
from portal.models import StudentProfile
from portal.schemas.schemas import ProfileResponse, ProfileUpdate, UploadResponse
from portal.utils.file_upload import delete_upload, read_pdf_upload, save_upload

router = APIRouter(prefix="/profile", tags=["Profile"])
logger = structlog.get_logger(__name__)


def get_profile_for(db: Session, user_id: str) -> Optional[StudentProfile]:
    return db.scalar(select(StudentProfile).where(StudentProfile.user_id == user_id))


def get_or_create_profile(db: Session, user_id: str) -> StudentProfile:
    """Profiles are created lazily on the first write."""
    profile = get_profile_for(db, user_id)
    if profile is None:
        profile = StudentProfile(user_id=user_id)
        db.add(profile)
        logger.info("profile_created", user_id=user_id)
    return profile


def save_profile(db: Session, user_id: str, changes: Dict[str, Any]) -> StudentProfile:
    """
    Apply `changes` to the user's profile and commit.

    Two first writes for the same account can both see "no profile"; the
    one whose insert loses on the unique user_id re-applies its changes to
    the row the other inserted. Any other IntegrityError is re-raised.
    """
    profile = get_or_create_profile(db, user_id)
    for field, value in changes.items():
        setattr(profile, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = db.scalar(select(StudentProfile).where(StudentProfile.user_id == user_id))
        if existing is None or existing is profile:
            raise
        logger.info("profile_create_raced", user_id=user_id)
        for field, value in changes.items():
            setattr(existing, field, value)
        db.commit()
        profile = existing

    db.refresh(profile)
    return profile


@router.get("", response_model=Optional[ProfileResponse])
def get_profile(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get current user's profile, or null if it has never been written."""
    return get_profile_for(db, user.user_id)


@router.patch("", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdate,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update profile. Only provided fields are updated; creates the profile if missing."""
    updates = data.model_dump(exclude_unset=True)

    try:
        profile = save_profile(db, user.user_id, updates)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Roll number already in use")

    logger.info("profile_updated", user_id=user.user_id, fields=sorted(updates))
    return profile


@router.post("/resume", response_model=UploadResponse)
async def upload_resume(
    resume: UploadFile = File(..., description="Resume file (PDF only)"),
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Upload a resume PDF and attach it to the profile.

    Process:
    1. Validate type/size (nothing stored on failure)
    2. Write the file to the upload directory
    3. Point profile.resume_url at it (creating the profile if needed);
       the file is removed again if that write fails
    """
    content = await read_pdf_upload(resume)
    file_url = save_upload(content, "resume")

    try:
        save_profile(db, user.user_id, {"resume_url": file_url})
    except SQLAlchemyError:
        db.rollback()
        delete_upload(file_url)
        logger.error("resume_save_failed", user_id=user.user_id, file_url=file_url)
        raise

    logger.info("resume_uploaded", user_id=user.user_id, file_url=file_url)
    return UploadResponse(message="Resume uploaded successfully", file_url=file_url)
