"""
Tests for password hashing, JWT helpers and database URL handling.
"""

import datetime

from findiag.core.database import normalize_db_url, utcnow
from findiag.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_verify_password_rejects_unknown_hash_format():
    # md5 hex digest of "admin"
    assert not verify_password("admin", "21232f297a57a5a743894a0e4a801fc3")


def test_token_carries_subject():
    payload = decode_token(create_access_token({"sub": "admin"}))

    assert payload["sub"] == "admin"
    assert "exp" in payload


def test_expired_or_tampered_token_is_rejected():
    assert decode_token(create_access_token({"sub": "admin"}, expires_minutes=-1)) is None
    assert decode_token(create_access_token({"sub": "admin"}) + "x") is None


def test_normalize_db_url():
    assert normalize_db_url("postgres://u:p@host/db") == "postgresql+psycopg://u:p@host/db"
    assert normalize_db_url("postgresql://u:p@host/db") == "postgresql+psycopg://u:p@host/db"
    assert normalize_db_url("postgresql+psycopg2://u:p@host/db") == "postgresql+psycopg2://u:p@host/db"
    assert normalize_db_url(" sqlite:///./findiag.db ") == "sqlite:///./findiag.db"


def test_utcnow_is_timezone_aware():
    now = utcnow()

    assert now.tzinfo is not None
    assert now.utcoffset() == datetime.timedelta(0)
