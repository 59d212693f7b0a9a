"""
Authentication Utility - JWT cookies and password handling.

Provides:
- Password hashing with bcrypt
- AccessGate: token issue/verify and role checks, keyed by an explicit secret
- FastAPI dependencies for protected routes (cookie-based)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import structlog
from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from passlib.context import CryptContext

from portal.core.config import get_settings

logger = structlog.get_logger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ROLES = ("student", "admin")


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


class AuthenticationError(Exception):
    """Missing, malformed or expired token. One message for every cause."""

    def __init__(self):
        super().__init__("Authentication required")


class AuthorizationError(Exception):
    """Valid identity, wrong role."""

    def __init__(self, required_role: str):
        self.required_role = required_role
        super().__init__("Access forbidden")


@dataclass(frozen=True)
class Identity:
    user_id: str
    role: str


class AccessGate:
    """
    Two-stage request gate: authenticate the token, then authorize the role.

    The signing secret is passed in explicitly; the gate holds no per-request
    state, so one instance serves every request.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_delta = timedelta(days=expire_days)

    def issue_token(self, user_id: str, role: str, now: Optional[datetime] = None) -> str:
        """Sign {sub, role, exp} for a freshly logged-in user."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {"sub": str(user_id), "role": role, "exp": issued_at + self.expire_delta}
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def authenticate(self, token: Optional[str]) -> Identity:
        """Verify signature and expiry and return the caller's identity."""
        if not token:
            raise AuthenticationError()
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise AuthenticationError()

        user_id = payload.get("sub")
        role = payload.get("role")
        if not user_id or role not in ROLES:
            raise AuthenticationError()
        return Identity(user_id=user_id, role=role)

    def authorize(self, identity: Identity, required_role: str) -> Identity:
        if identity.role != required_role:
            raise AuthorizationError(required_role)
        return identity


@lru_cache()
def get_access_gate() -> AccessGate:
    """Gate configured from settings. Override this dependency in tests."""
    settings = get_settings()
    return AccessGate(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_days=settings.jwt_expire_days,
    )


async def get_current_user(request: Request, gate: AccessGate = Depends(get_access_gate)) -> Identity:
    """
    FastAPI dependency - Get current authenticated user from the auth cookie.

    Usage:
        @router.get("/protected")
        async def route(user: Identity = Depends(get_current_user)):
            return user
    """
    token = request.cookies.get(get_settings().auth_cookie_name)
    try:
        return gate.authenticate(token)
    except AuthenticationError as exc:
        logger.info("authentication_rejected", path=request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))


def require_role(role: str):
    """Dependency factory - require an authenticated user with `role`."""

    async def dependency(
        user: Identity = Depends(get_current_user),
        gate: AccessGate = Depends(get_access_gate),
    ) -> Identity:
        try:
            return gate.authorize(user, role)
        except AuthorizationError as exc:
            logger.info("authorization_rejected", user_id=user.user_id, role=user.role, required_role=role)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))

    return dependency


require_admin = require_role("admin")
