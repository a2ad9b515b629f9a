"""
auth.py — Admin Authentication Endpoints (API Layer)

Purpose:
- Log admins in and issue JWT access tokens.
- Report the currently authenticated admin.
- Delegates password hashing and token encoding to core/security.py and
  account lookups to services/admin_users.py.

Sessions are stateless: nothing is kept server-side between requests, so
logout is a client-side token discard.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from findiag.core.config import settings
from findiag.core.database import get_db
from findiag.core.logging import get_logger
from findiag.core.security import create_access_token, get_current_admin
from findiag.models.admin_user import AdminUser
from findiag.services.admin_users import authenticate_admin

logger = get_logger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

# -----------------------------------------------------------------------------
# Request / Response Schemas
# -----------------------------------------------------------------------------

class LoginRequest(BaseModel):
    """
    Schema for login POST.
    - `username`: Admin login name.
    - `password`: Raw password supplied by the admin.
    """
    username: str
    password: str


class TokenResponse(BaseModel):
    """
    Response schema when issuing JWT access tokens.
    - `access_token`: Encoded JWT string.
    - `token_type`: 'bearer' for Authorization headers.
    - `expires_in`: Token lifetime in seconds.
    """
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class AdminOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    last_login: Optional[datetime.datetime] = None


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """
    POST /auth/login

    High-Level Flow:
    1. Look up admin by username and verify the password hash.
    2. If valid → issue JWT access token (sub = username).
    3. If invalid → 401 Unauthorized.
    """
    admin = authenticate_admin(db, payload.username, payload.password)
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token({"sub": admin.username})
    logger.info("Admin %s logged in", admin.username)

    return TokenResponse(
        access_token=access_token,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
    )


@router.post("/logout")
def logout():
    """
    POST /auth/logout

    Stateless JWT means logout is client-side only (delete token in UI).
    """
    return {"message": "Logout successful (client should delete stored token)"}


@router.get("/me", response_model=AdminOut)
def read_current_admin(admin: AdminUser = Depends(get_current_admin)):
    """
    GET /auth/me

    Returns the admin the bearer token belongs to.
    """
    return admin
