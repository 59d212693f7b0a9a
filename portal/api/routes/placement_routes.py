"""
Placement Routes - placement statistics

GET /placements - List placement records (newest first)
GET /placements/analysis - Company/branch/year summaries for charts
POST /placements - Record placements (admin only)
DELETE /placements/{placement_id} - Delete record (admin only)
"""

from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.core.auth import Identity, get_current_user, require_admin
from portal.db.database import get_db
from portal.models import Placement
from portal.schemas.schemas import (
    BranchStat, CompanyStat, MessageResponse, PlacementAnalysisResponse,
    PlacementCreate, PlacementResponse, YearStat
)
from portal.services.placement_stats import summarize

router = APIRouter(prefix="/placements", tags=["Placements"])
logger = structlog.get_logger(__name__)


def all_placements(db: Session) -> List[Placement]:
    # Oldest first so "first occurrence" ordering in the analysis is stable
    return db.scalars(select(Placement).order_by(Placement.created_at.asc())).all()


@router.get("", response_model=List[PlacementResponse])
def list_placements(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return db.scalars(select(Placement).order_by(Placement.created_at.desc())).all()


@router.get("/analysis", response_model=PlacementAnalysisResponse)
def placement_analysis(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Chart data. `has_data` is false when nothing has been recorded yet,
    in which case all three lists are empty.
    """
    analysis = summarize(all_placements(db))
    return PlacementAnalysisResponse(
        has_data=analysis.has_data,
        total_placed=analysis.total_placed,
        company_wise=[CompanyStat(company_name=k, students_placed=v) for k, v in analysis.company_wise],
        branch_wise=[BranchStat(branch=k, students_placed=v) for k, v in analysis.branch_wise],
        year_wise=[YearStat(year=k, students_placed=v) for k, v in analysis.year_wise],
    )


@router.post("", response_model=PlacementResponse, status_code=201)
def create_placement(data: PlacementCreate, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    row = Placement(**data.model_dump(), created_by=admin.user_id)
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info("placement_recorded", placement_id=row.id, company=row.company_name,
                year=row.year, students_placed=row.students_placed)
    return row


@router.delete("/{placement_id}", response_model=MessageResponse)
def delete_placement(placement_id: str, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    row = db.get(Placement, placement_id)
    if not row:
        raise HTTPException(status_code=404, detail="Placement not found")
    db.delete(row)
    db.commit()

    logger.info("placement_deleted", placement_id=placement_id, admin_id=admin.user_id)
    return MessageResponse(message="Placement deleted successfully")
