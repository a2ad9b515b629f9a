"""
admin.py — Administrative Browsing of Diagnosis History (API Layer)

Purpose:
- GET /admin/diagnoses → filtered, paginated list of stored diagnoses.
- GET /admin/diagnoses/{id} → one stored run: raw inputs, contact details and
  the deserialized DiagnosisResult.
- GET /admin/stats → number of diagnoses per risk tier.

Every route requires a bearer token from POST /auth/login.
"""

import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from findiag.api.v1.diagnose import DiagnosisOut
from findiag.core.config import settings
from findiag.core.database import get_db
from findiag.core.logging import get_logger
from findiag.core.security import get_current_admin
from findiag.models.admin_user import AdminUser
from findiag.services.history import (
    get_history,
    load_result,
    risk_level_counts,
    search_history,
    stored_financials,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin"]
)

# -----------------------------------------------------------------------------
# Schemas
# -----------------------------------------------------------------------------

class AdminHistoryItem(BaseModel):
    id: int
    company_name: str
    industry_code: str
    firm_size_type: str
    year: int
    risk_level: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    created_at: Optional[datetime.datetime] = None


class AdminHistoryPage(BaseModel):
    page: int
    page_size: int
    total: int
    results: List[AdminHistoryItem]


class AdminHistoryDetail(AdminHistoryItem):
    financials: Dict[str, Optional[float]]
    diagnosis: Optional[DiagnosisOut] = None


class RiskStats(BaseModel):
    total: int
    HIGH: int
    MEDIUM: int
    LOW: int


def _summary(row) -> dict:
    return {
        "id": row.id,
        "company_name": row.company_name,
        "industry_code": row.industry_code,
        "firm_size_type": row.firm_size_type,
        "year": row.year,
        "risk_level": row.risk_level,
        "contact_email": row.contact_email,
        "contact_phone": row.contact_phone,
        "created_at": row.created_at,
    }


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.get("/diagnoses", response_model=AdminHistoryPage)
def list_diagnoses(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1),
    risk_level: Optional[str] = Query(None, description="HIGH, MEDIUM or LOW"),
    company_name: Optional[str] = Query(None, description="Substring match on company name"),
    contact: Optional[str] = Query(None, description="Substring match on contact email or phone"),
    industry_code: Optional[str] = None,
    year: Optional[int] = None,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    """
    GET /admin/diagnoses

    Newest-first page of stored diagnoses. page_size is capped at
    ADMIN_PAGE_SIZE_MAX.
    """
    page_size = min(page_size, settings.ADMIN_PAGE_SIZE_MAX)
    rows, total = search_history(
        db,
        page=page,
        page_size=page_size,
        risk_level=risk_level,
        company_name=company_name,
        contact=contact,
        industry_code=industry_code,
        year=year,
    )
    logger.info("Admin %s listed diagnoses page %d (%d total)", admin.username, page, total)
    return {
        "page": page,
        "page_size": page_size,
        "total": total,
        "results": [_summary(row) for row in rows],
    }


@router.get("/diagnoses/{history_id}", response_model=AdminHistoryDetail)
def get_diagnosis(
    history_id: int,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    """
    GET /admin/diagnoses/{history_id}

    Raises:
        404: unknown id
    """
    row = get_history(db, history_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Diagnosis {history_id} not found")

    result = load_result(row)
    return {
        **_summary(row),
        "financials": stored_financials(row),
        "diagnosis": result.to_dict() if result else None,
    }


@router.get("/stats", response_model=RiskStats)
def get_stats(
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    """
    GET /admin/stats

    Number of stored diagnoses per risk tier.
    """
    return risk_level_counts(db)
