"""
security.py — Authentication Utilities (Password Hashing & JWT Encoding)

Purpose:
- Hash & verify admin passwords (never store raw passwords).
- Issue and validate JWT access tokens for the admin endpoints.
- Resolve the current admin from the Authorization header.

Key Constraints:
- Only access tokens (no refresh tokens).
- Authentication is stateless — there is no server-side session store;
  logout means the client discards its token.

This module does NOT:
- Define API routes → that lives in findiag/api/v1/auth.py
- Query the database directly (except via injected deps)
"""

import datetime
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from findiag.core.config import settings
from findiag.core.database import get_db
from findiag.models.admin_user import AdminUser


# -----------------------------------------------------------------------------
# Password Hashing
# -----------------------------------------------------------------------------

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(raw_password: str) -> str:
    """
    Hash a plaintext password using bcrypt.
    """
    return pwd_context.hash(raw_password)

def verify_password(raw_password: str, hashed_password: str) -> bool:
    """
    Verify that a raw password matches its hashed stored version.
    """
    try:
        return pwd_context.verify(raw_password, hashed_password)
    except ValueError:
        # Unrecognised hash format (e.g. a legacy md5 digest)
        return False


# -----------------------------------------------------------------------------
# JWT Token Handling
# -----------------------------------------------------------------------------

def create_access_token(data: Dict[str, Any], expires_minutes: Optional[int] = None) -> str:
    """
    Create a JWT access token with expiration.

    Expected payload format:
        data = {"sub": "<username>"}

    Returns:
        Encoded JWT string.
    """
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES
    to_encode = data.copy()
    expire_at = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(minutes=minutes)
    to_encode.update({"exp": expire_at})

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and validate a JWT token.
    Returns the payload dict if valid, None if invalid or expired.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


# -----------------------------------------------------------------------------
# Current Admin Dependency
# -----------------------------------------------------------------------------

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def get_current_admin(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> AdminUser:
    """
    Extract and return the authenticated admin from a bearer token.

    Flow:
    - Decode token.
    - Validate 'sub' (username).
    - Lookup admin in DB.
    """
    credentials_error = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(token)
    if not payload or not payload.get("sub"):
        raise credentials_error

    admin = db.query(AdminUser).filter(AdminUser.username == payload["sub"]).first()
    if admin is None:
        raise credentials_error
    return admin
