"""
API tests for admin login and token-protected history browsing.
"""

from tests.conftest import ADMIN_PASSWORD, ADMIN_USERNAME
from tests.test_api_diagnose import DIAGNOSE_PAYLOAD

from findiag.core.security import create_access_token


def _seed_history(client):
    client.post("/api/v1/diagnose", json=DIAGNOSE_PAYLOAD)
    client.post(
        "/api/v1/diagnose",
        json={
            "company_name": "건전상사",
            "industry_code": "C26",
            "firm_size_type": "외감",
            "year": 2023,
            "current_assets": 3000,
            "current_liabilities": 1500,
            "contact_email": "ceo@healthy.example",
        },
    )


# ============================================================================
# Authentication
# ============================================================================

def test_login_issues_bearer_token(client, admin_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]


def test_login_rejects_wrong_password(client, admin_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"username": ADMIN_USERNAME, "password": "wrong"},
    )
    assert response.status_code == 401


def test_login_rejects_unknown_user(client):
    response = client.post("/api/v1/auth/login", json={"username": "nobody", "password": "x"})
    assert response.status_code == 401


def test_login_updates_last_login(client, admin_user, seeded_db):
    assert admin_user.last_login is None
    client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    seeded_db.refresh(admin_user)
    assert admin_user.last_login is not None


def test_me_returns_current_admin(client, auth_headers):
    response = client.get("/api/v1/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["username"] == ADMIN_USERNAME


def test_admin_routes_require_token(client):
    assert client.get("/api/v1/admin/diagnoses").status_code == 401
    assert client.get("/api/v1/admin/stats").status_code == 401


def test_admin_routes_reject_bad_or_expired_token(client, admin_user):
    bad = {"Authorization": "Bearer not-a-jwt"}
    expired = {"Authorization": f"Bearer {create_access_token({'sub': ADMIN_USERNAME}, expires_minutes=-1)}"}
    unknown = {"Authorization": f"Bearer {create_access_token({'sub': 'ghost'})}"}

    for headers in (bad, expired, unknown):
        assert client.get("/api/v1/admin/diagnoses", headers=headers).status_code == 401


# ============================================================================
# Browsing
# ============================================================================

def test_list_diagnoses_paginates_newest_first(client, auth_headers):
    _seed_history(client)

    response = client.get("/api/v1/admin/diagnoses", params={"page_size": 1}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["page_size"] == 1
    assert [r["company_name"] for r in body["results"]] == ["건전상사"]

    second = client.get("/api/v1/admin/diagnoses", params={"page": 2, "page_size": 1}, headers=auth_headers)
    assert [r["company_name"] for r in second.json()["results"]] == ["테스트전자"]


def test_list_diagnoses_filters(client, auth_headers):
    _seed_history(client)

    high = client.get("/api/v1/admin/diagnoses", params={"risk_level": "high"}, headers=auth_headers).json()
    assert [r["company_name"] for r in high["results"]] == ["테스트전자"]

    by_contact = client.get("/api/v1/admin/diagnoses", params={"contact": "healthy"}, headers=auth_headers).json()
    assert [r["company_name"] for r in by_contact["results"]] == ["건전상사"]

    by_phone = client.get("/api/v1/admin/diagnoses", params={"contact": "1234"}, headers=auth_headers).json()
    assert by_phone["total"] == 1

    by_name = client.get("/api/v1/admin/diagnoses", params={"company_name": "전자"}, headers=auth_headers).json()
    assert by_name["total"] == 1

    none = client.get("/api/v1/admin/diagnoses", params={"year": 2020}, headers=auth_headers).json()
    assert none["total"] == 0


def test_diagnosis_detail_includes_inputs_and_result(client, auth_headers):
    _seed_history(client)
    listing = client.get("/api/v1/admin/diagnoses", params={"risk_level": "HIGH"}, headers=auth_headers).json()
    history_id = listing["results"][0]["id"]

    response = client.get(f"/api/v1/admin/diagnoses/{history_id}", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["financials"]["current_assets"] == 2000.0
    assert body["financials"]["interest_expense"] is None
    assert body["contact_phone"] == "010-1234-5678"
    assert body["diagnosis"]["risk_level"] == "HIGH"
    assert body["diagnosis"]["calculated_ratios"]["current_ratio"] == 133.33


def test_diagnosis_detail_unknown_id_is_404(client, auth_headers):
    assert client.get("/api/v1/admin/diagnoses/9999", headers=auth_headers).status_code == 404


def test_stats_counts_by_risk_tier(client, auth_headers):
    _seed_history(client)

    response = client.get("/api/v1/admin/stats", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"total": 2, "HIGH": 1, "MEDIUM": 0, "LOW": 1}
