"""
Dashboard Routes - summary data for the landing screens

GET /dashboard/student - Eligible jobs, my applications, latest notifications
GET /dashboard/admin - Students, active jobs, students placed, upcoming events (admin only)
"""

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from portal.api.routes.application_routes import list_applications_for
from portal.api.routes.notification_routes import latest_notifications
from portal.api.routes.placement_routes import all_placements
from portal.api.routes.profile_routes import get_profile_for
from portal.core.auth import Identity, get_current_user, require_admin
from portal.db.database import get_db
from portal.models import Event, Job, JobApplication, User
from portal.schemas.schemas import (
    AdminDashboardResponse, NotificationResponse, StudentDashboardResponse
)
from portal.services.eligibility import filter_eligible, parse_grade
from portal.services.placement_stats import total_placed

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

RECENT_APPLICATIONS = 3
LATEST_NOTIFICATIONS = 5


@router.get("/student", response_model=StudentDashboardResponse)
def student_dashboard(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    profile = get_profile_for(db, user.user_id)
    jobs = db.scalars(select(Job)).all()
    total_applications = db.scalar(
        select(func.count(JobApplication.id)).where(JobApplication.student_id == user.user_id)
    )

    return StudentDashboardResponse(
        profile_complete=bool(
            profile and parse_grade(profile.cgpa) is not None and profile.branch and profile.course
        ),
        eligible_jobs=len(filter_eligible(profile, jobs)),
        total_applications=total_applications or 0,
        recent_applications=list_applications_for(db, user.user_id, limit=RECENT_APPLICATIONS),
        notifications=[
            NotificationResponse.model_validate(n)
            for n in latest_notifications(db, limit=LATEST_NOTIFICATIONS)
        ],
    )


@router.get("/admin", response_model=AdminDashboardResponse)
def admin_dashboard(admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    now = datetime.now(timezone.utc)
    return AdminDashboardResponse(
        total_students=db.scalar(select(func.count(User.id)).where(User.role == "student")) or 0,
        active_jobs=db.scalar(select(func.count(Job.id)).where(Job.deadline >= now)) or 0,
        students_placed=total_placed(all_placements(db)),
        upcoming_events=db.scalar(select(func.count(Event.id)).where(Event.event_date >= date.today())) or 0,
    )
