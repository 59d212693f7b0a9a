"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

import re
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    admin = "admin"


TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken as UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _clean_codes(values: List[str]) -> List[str]:
    """Strip, drop blanks and duplicates, keep order."""
    cleaned: List[str] = []
    for v in values:
        v = v.strip()
        if v and v not in cleaned:
            cleaned.append(v)
    if not cleaned:
        raise ValueError("at least one non-blank value is required")
    return cleaned


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole

class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: UserRole

class UserResponse(ORMModel):
    id: str
    email: str
    name: str
    role: str

class LoginResponse(BaseModel):
    message: str
    user: UserResponse


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileUpdate(BaseModel):
    roll_number: Optional[str] = Field(None, min_length=1, max_length=50)
    cgpa: Optional[Decimal] = Field(None, ge=0, le=10, max_digits=4, decimal_places=2)
    branch: Optional[str] = Field(None, min_length=1, max_length=50)
    course: Optional[str] = Field(None, min_length=1, max_length=50)
    phone: Optional[str] = Field(None, max_length=50)

class ProfileResponse(ORMModel):
    id: str
    user_id: str
    roll_number: Optional[str] = None
    cgpa: Optional[Decimal] = None
    branch: Optional[str] = None
    course: Optional[str] = None
    phone: Optional[str] = None
    resume_url: Optional[str] = None
    updated_at: datetime

class UploadResponse(BaseModel):
    message: str
    file_url: str


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, max_length=255)
    package: str = Field(..., min_length=1, max_length=100)
    min_cgpa: Decimal = Field(Decimal("0.00"), ge=0, le=10, max_digits=4, decimal_places=2)
    allowed_branches: List[str] = Field(..., min_length=1)
    allowed_courses: List[str] = Field(..., min_length=1)
    deadline: datetime

    @field_validator("allowed_branches", "allowed_courses")
    @classmethod
    def clean_codes(cls, values: List[str]) -> List[str]:
        return _clean_codes(values)

    @field_validator("deadline")
    @classmethod
    def deadline_as_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

class JobUpdate(BaseModel):
    company_name: Optional[str] = Field(None, min_length=1, max_length=255)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    package: Optional[str] = Field(None, min_length=1, max_length=100)
    min_cgpa: Optional[Decimal] = Field(None, ge=0, le=10, max_digits=4, decimal_places=2)
    allowed_branches: Optional[List[str]] = Field(None, min_length=1)
    allowed_courses: Optional[List[str]] = Field(None, min_length=1)
    deadline: Optional[datetime] = None

    @field_validator("allowed_branches", "allowed_courses")
    @classmethod
    def clean_codes(cls, values: Optional[List[str]]) -> Optional[List[str]]:
        return None if values is None else _clean_codes(values)

    @field_validator("deadline")
    @classmethod
    def deadline_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)

class JobResponse(ORMModel):
    id: str
    company_name: str
    title: str
    description: str
    location: str
    package: str
    min_cgpa: Decimal
    allowed_branches: List[str]
    allowed_courses: List[str]
    deadline: datetime
    posted_by: str
    posted_at: datetime
    is_eligible: Optional[bool] = None
    has_applied: bool = False


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    job_id: str = Field(..., min_length=1)

class ApplicationResponse(ORMModel):
    id: str
    job_id: str
    student_id: str
    applied_at: datetime
    status: str

class MyApplicationResponse(ApplicationResponse):
    job_title: str
    company_name: str


# ============================================================
# FORUM / PPT / EVENT / NOTIFICATION SCHEMAS
# ============================================================

class ForumPostCreate(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)

class ForumPostResponse(ORMModel):
    id: str
    user_id: str
    company_name: str
    title: str
    content: str
    posted_at: datetime
    author_name: str = "Unknown"

class PptResponse(ORMModel):
    id: str
    company_name: str
    file_url: str
    uploaded_by: str
    uploaded_at: datetime

class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    event_date: date
    event_time: str = Field(..., description="24h time, HH:MM")

    @field_validator("event_time")
    @classmethod
    def check_time(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("event_time must be HH:MM (24h)")
        return value

class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    event_date: Optional[date] = None
    event_time: Optional[str] = None

    @field_validator("event_time")
    @classmethod
    def check_time(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not TIME_PATTERN.match(value):
            raise ValueError("event_time must be HH:MM (24h)")
        return value

class EventResponse(ORMModel):
    id: str
    title: str
    description: str
    event_date: date
    event_time: str
    created_by: str
    created_at: datetime

class NotificationCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)

class NotificationResponse(ORMModel):
    id: str
    title: str
    message: str
    created_by: str
    created_at: datetime


# ============================================================
# PLACEMENT SCHEMAS
# ============================================================

class PlacementCreate(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    students_placed: int = Field(..., ge=0)
    year: int = Field(..., ge=1900, le=2100)
    branch: str = Field(..., min_length=1, max_length=50)

class PlacementResponse(ORMModel):
    id: str
    company_name: str
    students_placed: int
    year: int
    branch: str
    created_by: str
    created_at: datetime

class CompanyStat(BaseModel):
    company_name: str
    students_placed: int

class BranchStat(BaseModel):
    branch: str
    students_placed: int

class YearStat(BaseModel):
    year: int
    students_placed: int

class PlacementAnalysisResponse(BaseModel):
    has_data: bool
    total_placed: int
    company_wise: List[CompanyStat] = []
    branch_wise: List[BranchStat] = []
    year_wise: List[YearStat] = []


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class StudentDashboardResponse(BaseModel):
    profile_complete: bool
    eligible_jobs: int
    total_applications: int
    recent_applications: List[MyApplicationResponse] = []
    notifications: List[NotificationResponse] = []

class AdminDashboardResponse(BaseModel):
    total_students: int
    active_jobs: int
    students_placed: int
    upcoming_events: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
