"""
Models module - SQLAlchemy ORM tables for the placement portal.
"""

from portal.models.user import User, StudentProfile
from portal.models.job import Job, JobApplication
from portal.models.content import ForumPost, Ppt, Event, Notification
from portal.models.placement import Placement

__all__ = [
    "User",
    "StudentProfile",
    "Job",
    "JobApplication",
    "ForumPost",
    "Ppt",
    "Event",
    "Notification",
    "Placement",
]
