"""
Authentication Routes

POST /auth/signup - Register new user (student or admin)
POST /auth/login - Login; sets the HTTP-only auth cookie
POST /auth/logout - Clear the auth cookie
GET /auth/me - Get current user info
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.core.auth import (
    AccessGate, Identity, get_access_gate, get_current_user, hash_password, verify_password
)
from portal.core.config import get_settings
from portal.db.database import get_db
from portal.models import User
from portal.schemas.schemas import (
    LoginRequest, LoginResponse, MessageResponse, SignupRequest, UserResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = structlog.get_logger(__name__)


@router.post("/signup", response_model=MessageResponse, status_code=201)
def signup(request: SignupRequest, db: Session = Depends(get_db)):
    """
    Register a new user account.

    Student profiles are not created here; the first profile write creates one.
    """
    email = request.email.lower()
    if db.scalar(select(User.id).where(User.email == email)):
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(
        email=email,
        password=hash_password(request.password),
        name=request.name,
        role=request.role.value,
    )
    db.add(user)
    db.commit()

    logger.info("user_registered", user_id=user.id, role=user.role)
    return MessageResponse(message="User created successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    gate: AccessGate = Depends(get_access_gate),
):
    """
    Login and receive the JWT as an HTTP-only cookie (valid 7 days).
    """
    user = db.scalar(select(User).where(User.email == request.email.lower()))

    if not user or not verify_password(request.password, user.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if user.role != request.role.value:
        raise HTTPException(status_code=401, detail="Invalid role selected")

    settings = get_settings()
    token = gate.issue_token(user.id, user.role)
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=int(gate.expire_delta.total_seconds()),
    )

    logger.info("user_logged_in", user_id=user.id, role=user.role)
    return LoginResponse(message="Login successful", user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    """
    Tell the client to drop the cookie. The token itself stays valid until it expires.
    """
    response.delete_cookie(get_settings().auth_cookie_name)
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=UserResponse)
def get_me(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get current authenticated user's info."""
    row = db.get(User, user.user_id)
    if not row:
        raise HTTPException(status_code=404, detail="User not found")
    return row
