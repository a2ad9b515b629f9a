"""
Shared fixtures: in-memory SQLite database, seeded reference data and a
FastAPI TestClient wired to it.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from findiag import models  # noqa: F401  (registers tables)
from findiag.core.database import Base, get_db
from findiag.main import app
from findiag.models.benchmark_ratio import BenchmarkRatio
from findiag.models.industry_code import IndustryCode
from findiag.services.admin_users import create_admin

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db):
    """Two industries and one valid + one superseded benchmark row."""
    db.add_all([
        IndustryCode(code="C26", name="전자부품, 컴퓨터, 영상, 음향 및 통신장비 제조업", category="제조업"),
        IndustryCode(code="G46", name="도매 및 상품 중개업", category="도소매업"),
    ])
    db.add_all([
        BenchmarkRatio(
            year=2023,
            industry_code="C26",
            firm_size_type="외감",
            current_ratio=120.0,
            quick_ratio=90.0,
            debt_ratio=150.0,
            equity_ratio=40.0,
            operating_margin=5.0,
            net_margin=3.0,
            roa=3.0,
            roe=8.0,
            asset_turnover=1.0,
            inventory_turnover=8.0,
            receivable_turnover=6.0,
            interest_coverage=4.0,
            valid_yn="Y",
        ),
        BenchmarkRatio(
            year=2023,
            industry_code="G46",
            firm_size_type="외감",
            current_ratio=999.0,
            valid_yn="N",
        ),
    ])
    db.commit()
    return db


@pytest.fixture
def client(seeded_db):
    def override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_user(seeded_db):
    return create_admin(seeded_db, username=ADMIN_USERNAME, password=ADMIN_PASSWORD, full_name="관리자")


@pytest.fixture
def auth_headers(client, admin_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
