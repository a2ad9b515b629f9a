"""
database.py — Database Session & Connection Management

Purpose:
- Create and provide access to the relational store used by the service.
- Manage SQLAlchemy Engine + Session lifecycle.
- Expose a FastAPI dependency `get_db()` that yields a session per-request.
- Own the shared declarative `Base` every ORM model in findiag/models/ uses.

Key Characteristics:
- Synchronous SQLAlchemy engine.
- SQLite by default for local runs; PostgreSQL (psycopg v3) when DATABASE_URL points there.
- Schema is created by `init_db()` (no Alembic); the DDL lives in the ORM models.

This module does NOT:
- Define ORM models (see findiag/models/*).
- Perform any queries or business logic beyond bootstrap.
"""

import datetime

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from findiag.core.config import settings
from findiag.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime.datetime:
    """Timezone-aware current UTC time, used for timestamp column defaults."""
    return datetime.datetime.now(datetime.timezone.utc)


# -----------------------------------------------------------------------------
# SQLAlchemy Engine
# -----------------------------------------------------------------------------

def normalize_db_url(db_url: str) -> str:
    """
    Rewrite bare postgres URLs so SQLAlchemy picks the psycopg (v3) driver.

    Example:
        postgresql://u:p@host/db → postgresql+psycopg://u:p@host/db
    """
    db_url = db_url.strip()
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)
    if db_url.startswith("postgresql://") and "+" not in db_url.split("://")[0]:
        db_url = db_url.replace("postgresql://", "postgresql+psycopg://", 1)
    return db_url


def build_engine(db_url: str):
    db_url = normalize_db_url(db_url)
    if db_url.startswith("sqlite"):
        # FastAPI serves sync endpoints from a threadpool
        return create_engine(db_url, connect_args={"check_same_thread": False})
    return create_engine(db_url, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# -----------------------------------------------------------------------------
# FastAPI Dependency
# -----------------------------------------------------------------------------

def get_db() -> Session:
    """
    FastAPI dependency: yields a database session for the duration of the request.

    Usage in API endpoint:
        def endpoint(db: Session = Depends(get_db)):
            db.query(...)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# -----------------------------------------------------------------------------
# Schema Bootstrap
# -----------------------------------------------------------------------------

def init_db(bind=None) -> None:
    """
    Create all tables (safe to call multiple times) and, when configured,
    the bootstrap admin account.
    """
    # Register every model on Base.metadata before create_all
    from findiag import models  # noqa: F401
    from findiag.services.admin_users import ensure_admin

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema ensured on %s", bind.url.render_as_string(hide_password=True))

    if settings.BOOTSTRAP_ADMIN_USERNAME and settings.BOOTSTRAP_ADMIN_PASSWORD:
        with Session(bind) as db:
            ensure_admin(
                db,
                username=settings.BOOTSTRAP_ADMIN_USERNAME,
                password=settings.BOOTSTRAP_ADMIN_PASSWORD,
            )
