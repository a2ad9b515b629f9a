"""
admin_users.py — Helpers for Administrator Accounts

Purpose:
- Create admin accounts (bootstrap at startup, scripts/create_admin.py).
- Authenticate a username/password pair and stamp last_login.

Keeps account queries out of the API and security layers.
"""

from typing import Optional

from sqlalchemy.orm import Session

from findiag.core.database import utcnow
from findiag.core.logging import get_logger
from findiag.core.security import hash_password, verify_password
from findiag.models.admin_user import AdminUser

logger = get_logger(__name__)


def get_admin_by_username(db: Session, username: str) -> Optional[AdminUser]:
    return db.query(AdminUser).filter(AdminUser.username == username).first()


def create_admin(
    db: Session,
    username: str,
    password: str,
    full_name: Optional[str] = None,
    email: Optional[str] = None,
) -> AdminUser:
    """
    Create and persist a new admin. Raises ValueError if the username is taken.
    """
    if get_admin_by_username(db, username) is not None:
        raise ValueError(f"Admin '{username}' already exists")

    admin = AdminUser(
        username=username,
        password_hash=hash_password(password),
        full_name=full_name,
        email=email,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Created admin account %s", username)
    return admin


def ensure_admin(db: Session, username: str, password: str) -> AdminUser:
    """Create the admin if it does not exist yet; leave an existing one untouched."""
    existing = get_admin_by_username(db, username)
    if existing is not None:
        return existing
    return create_admin(db, username=username, password=password)


def authenticate_admin(db: Session, username: str, password: str) -> Optional[AdminUser]:
    """
    Return the admin when the credentials match, else None.
    A successful login updates last_login.
    """
    admin = get_admin_by_username(db, username)
    if admin is None or not verify_password(password, admin.password_hash):
        logger.warning("Failed admin login for %s", username)
        return None

    admin.last_login = utcnow()
    db.commit()
    return admin
