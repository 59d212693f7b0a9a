"""
Notification Routes

GET /notifications - List notifications (newest first)
POST /notifications - Publish notification (admin only)
DELETE /notifications/{notification_id} - Delete notification (admin only)
"""

from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.core.auth import Identity, get_current_user, require_admin
from portal.db.database import get_db
from portal.models import Notification
from portal.schemas.schemas import MessageResponse, NotificationCreate, NotificationResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])
logger = structlog.get_logger(__name__)


def latest_notifications(db: Session, limit: Optional[int] = None) -> List[Notification]:
    query = select(Notification).order_by(Notification.created_at.desc())
    if limit is not None:
        query = query.limit(limit)
    return db.scalars(query).all()


@router.get("", response_model=List[NotificationResponse])
def list_notifications(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return latest_notifications(db)


@router.post("", response_model=NotificationResponse, status_code=201)
def create_notification(
    data: NotificationCreate,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    row = Notification(**data.model_dump(), created_by=admin.user_id)
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info("notification_published", notification_id=row.id, admin_id=admin.user_id)
    return row


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: str,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    row = db.get(Notification, notification_id)
    if not row:
        raise HTTPException(status_code=404, detail="Notification not found")
    db.delete(row)
    db.commit()

    logger.info("notification_deleted", notification_id=notification_id, admin_id=admin.user_id)
    return MessageResponse(message="Notification deleted successfully")
