"""
Event Routes - placement calendar

GET /events - Calendar, ordered by date then time
POST /events - Create event (admin only)
PATCH /events/{event_id} - Update event (admin only)
DELETE /events/{event_id} - Delete event (admin only)
"""

from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.core.auth import Identity, get_current_user, require_admin
from portal.db.database import get_db
from portal.models import Event
from portal.schemas.schemas import EventCreate, EventResponse, EventUpdate, MessageResponse

router = APIRouter(prefix="/events", tags=["Events"])
logger = structlog.get_logger(__name__)


def get_event_or_404(db: Session, event_id: str) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("", response_model=List[EventResponse])
def list_events(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return db.scalars(select(Event).order_by(Event.event_date.asc(), Event.event_time.asc())).all()


@router.post("", response_model=EventResponse, status_code=201)
def create_event(data: EventCreate, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    event = Event(**data.model_dump(), created_by=admin.user_id)
    db.add(event)
    db.commit()
    db.refresh(event)

    logger.info("event_created", event_id=event.id, event_date=str(event.event_date))
    return event


@router.patch("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    data: EventUpdate,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    event = get_event_or_404(db, event_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(event, field, value)
    db.commit()
    db.refresh(event)

    logger.info("event_updated", event_id=event_id, fields=sorted(changes))
    return event


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event(event_id: str, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    event = get_event_or_404(db, event_id)
    db.delete(event)
    db.commit()

    logger.info("event_deleted", event_id=event_id, admin_id=admin.user_id)
    return MessageResponse(message="Event deleted successfully")
