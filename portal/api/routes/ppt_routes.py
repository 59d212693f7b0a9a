"""
PPT Routes - company presentations

GET /ppts - List presentations (newest first)
POST /ppts - Upload presentation PDF (admin only)
DELETE /ppts/{ppt_id} - Delete presentation and its file (admin only)
"""

from typing import List

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.core.auth import Identity, get_current_user, require_admin
from portal.db.database import get_db
from portal.models import Ppt
from portal.schemas.schemas import MessageResponse, PptResponse
from portal.utils.file_upload import delete_upload, read_pdf_upload, save_upload

router = APIRouter(prefix="/ppts", tags=["PPTs"])
logger = structlog.get_logger(__name__)


@router.get("", response_model=List[PptResponse])
def list_ppts(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return db.scalars(select(Ppt).order_by(Ppt.uploaded_at.desc())).all()


@router.post("", response_model=PptResponse, status_code=201)
async def upload_ppt(
    company_name: str = Form(..., max_length=255),
    ppt: UploadFile = File(..., description="Presentation (PDF only)"),
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Upload a company presentation. Validated before anything is stored."""
    company_name = company_name.strip()
    if not company_name:
        raise HTTPException(status_code=400, detail="Company name is required")

    content = await read_pdf_upload(ppt)
    file_url = save_upload(content, "ppt")

    row = Ppt(company_name=company_name, file_url=file_url, uploaded_by=admin.user_id)
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info("ppt_uploaded", ppt_id=row.id, company=row.company_name, file_url=file_url)
    return row


@router.delete("/{ppt_id}", response_model=MessageResponse)
def delete_ppt(ppt_id: str, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    row = db.get(Ppt, ppt_id)
    if not row:
        raise HTTPException(status_code=404, detail="PPT not found")
    file_url = row.file_url
    db.delete(row)
    db.commit()

    if not delete_upload(file_url):
        logger.warning("ppt_file_missing", ppt_id=ppt_id, file_url=file_url)
    logger.info("ppt_deleted", ppt_id=ppt_id, admin_id=admin.user_id)
    return MessageResponse(message="PPT deleted successfully")
