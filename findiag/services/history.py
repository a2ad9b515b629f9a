"""
history.py — Utilities for Recording and Browsing Diagnosis History

Purpose:
- Persist a finished diagnosis (inputs, computed ratios, serialized result).
- Retrieve recent runs for the public history endpoint.
- Provide the filtered, paginated queries behind the admin endpoints.

This module does NOT:
- Run the diagnosis pipeline (services/diagnosis/engine.py).
- Decide who may read history (api/v1/admin.py + core/security.py).
"""

from __future__ import annotations

import json
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from findiag.core.logging import get_logger
from findiag.models.diagnosis_history import DiagnosisHistory
from findiag.services.diagnosis.types import (
    FINANCIAL_FIELDS,
    RATIO_ORDER,
    RISK_HIGH,
    RISK_LOW,
    RISK_MEDIUM,
    CompanyFinancials,
    DiagnosisResult,
)

logger = get_logger(__name__)


def record_diagnosis(
    db: Session,
    financials: CompanyFinancials,
    result: DiagnosisResult,
    contact_email: Optional[str] = None,
    contact_phone: Optional[str] = None,
) -> DiagnosisHistory:
    """
    Store one diagnosis run and return the persisted row.
    """
    row = DiagnosisHistory(
        company_name=financials.company_name,
        industry_code=financials.industry_code,
        firm_size_type=financials.firm_size_type,
        year=financials.year,
        diagnosis_result=json.dumps(result.to_dict(), ensure_ascii=False),
        risk_level=result.risk_level,
        contact_email=contact_email,
        contact_phone=contact_phone,
        **financials.figures(),
    )
    for name in RATIO_ORDER:
        setattr(row, f"calc_{name}", result.calculated_ratios.get(name))

    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Recorded diagnosis %s for %s (risk=%s)", row.id, row.company_name, row.risk_level)
    return row


def load_result(row: DiagnosisHistory) -> Optional[DiagnosisResult]:
    """Deserialize the stored DiagnosisResult, or None if the row has none."""
    if not row.diagnosis_result:
        return None
    return DiagnosisResult.from_dict(json.loads(row.diagnosis_result))


def stored_financials(row: DiagnosisHistory) -> Dict[str, Optional[float]]:
    return {name: getattr(row, name) for name in FINANCIAL_FIELDS}


def list_recent(db: Session, limit: int = 20) -> List[DiagnosisHistory]:
    return (
        db.query(DiagnosisHistory)
        .order_by(DiagnosisHistory.created_at.desc(), DiagnosisHistory.id.desc())
        .limit(limit)
        .all()
    )


def get_history(db: Session, history_id: int) -> Optional[DiagnosisHistory]:
    return db.get(DiagnosisHistory, history_id)


def search_history(
    db: Session,
    page: int = 1,
    page_size: int = 20,
    risk_level: Optional[str] = None,
    company_name: Optional[str] = None,
    contact: Optional[str] = None,
    industry_code: Optional[str] = None,
    year: Optional[int] = None,
) -> Tuple[List[DiagnosisHistory], int]:
    """
    Filtered, newest-first page of history rows.

    Args:
        page: 1-based page number
        page_size: rows per page
        risk_level: exact tier match (HIGH / MEDIUM / LOW)
        company_name: case-insensitive substring match
        contact: substring match against email OR phone
        industry_code: exact match
        year: exact match

    Returns:
        (rows on this page, total matching rows)
    """
    query = db.query(DiagnosisHistory)

    if risk_level:
        query = query.filter(DiagnosisHistory.risk_level == risk_level.upper())
    if company_name:
        query = query.filter(DiagnosisHistory.company_name.ilike(f"%{company_name}%"))
    if contact:
        query = query.filter(
            or_(
                DiagnosisHistory.contact_email.ilike(f"%{contact}%"),
                DiagnosisHistory.contact_phone.like(f"%{contact}%"),
            )
        )
    if industry_code:
        query = query.filter(DiagnosisHistory.industry_code == industry_code)
    if year is not None:
        query = query.filter(DiagnosisHistory.year == year)

    total = query.count()
    rows = (
        query.order_by(DiagnosisHistory.created_at.desc(), DiagnosisHistory.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return rows, total


def risk_level_counts(db: Session) -> Dict[str, int]:
    """Number of stored diagnoses per risk tier, plus the overall total."""
    counts = {RISK_HIGH: 0, RISK_MEDIUM: 0, RISK_LOW: 0}
    rows = (
        db.query(DiagnosisHistory.risk_level, func.count(DiagnosisHistory.id))
        .group_by(DiagnosisHistory.risk_level)
        .all()
    )
    for level, count in rows:
        if level in counts:
            counts[level] = count
    counts["total"] = sum(count for _, count in rows)
    return counts
