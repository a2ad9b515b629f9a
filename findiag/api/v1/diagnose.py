"""
diagnose.py — Financial Statement Diagnosis Endpoints (API Layer)

Purpose:
- POST /diagnose → validate input, resolve industry + benchmark, run the
  diagnosis engine, store the run, return the DiagnosisResult.
- GET /history → most recent diagnoses (summary only).

Role in System:
- Thin layer: request → validation → services → JSON response.
- The engine (services/diagnosis) assumes resolved, valid input; every
  user-facing error is raised here.

Data Flow:
Client → FastAPI Router → (this file) → benchmarks / diagnosis engine / history → DB → response
"""

import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from findiag.api.v1.industries import NO_BENCHMARK_MESSAGE
from findiag.core.config import settings
from findiag.core.database import get_db
from findiag.core.logging import get_logger
from findiag.services.benchmarks import find_benchmark, get_industry, to_benchmark_row
from findiag.services.diagnosis import CompanyFinancials, diagnose
from findiag.services.history import list_recent, record_diagnosis

logger = get_logger(__name__)

router = APIRouter(tags=["diagnosis"])

MISSING_FIELDS_MESSAGE = "필수 입력값(회사명, 업종코드, 연도)이 누락되었습니다."
UNKNOWN_INDUSTRY_MESSAGE = "유효하지 않은 업종코드입니다."
DIAGNOSIS_FAILED_MESSAGE = "진단 중 오류가 발생했습니다."

# -----------------------------------------------------------------------------
# Schemas
# -----------------------------------------------------------------------------

class DiagnoseRequest(BaseModel):
    """
    Company identity + financial statement figures.

    company_name, industry_code and year are mandatory (checked in the
    handler so the caller gets a 400 with a readable message). All figures
    are optional; ratios that need a missing figure are skipped.
    """
    company_name: Optional[str] = None
    industry_code: Optional[str] = None
    firm_size_type: Optional[str] = None
    year: Optional[int] = None

    sales: Optional[float] = None
    current_assets: Optional[float] = None
    current_liabilities: Optional[float] = None
    quick_assets: Optional[float] = None
    total_assets: Optional[float] = None
    total_liabilities: Optional[float] = None
    equity: Optional[float] = None
    operating_income: Optional[float] = None
    net_income: Optional[float] = None
    inventory: Optional[float] = None
    receivables: Optional[float] = None
    interest_expense: Optional[float] = None

    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None

    def to_financials(self) -> CompanyFinancials:
        data = self.model_dump(exclude={"contact_email", "contact_phone"})
        data["company_name"] = data["company_name"].strip()
        data["firm_size_type"] = data["firm_size_type"] or ""
        return CompanyFinancials(**data)


class ComparisonOut(BaseModel):
    ratio_name: str
    ratio_name_kr: str
    company_value: float
    industry_avg: float
    difference_pct: float
    status: str
    comment: str


class DiagnosisOut(BaseModel):
    company_name: str
    industry_name: str
    year: int
    firm_size_type: str
    calculated_ratios: Dict[str, float]
    industry_averages: Dict[str, float]
    comparisons: List[ComparisonOut]
    risk_level: str
    overall_comment: str
    recommendations: List[str]


class HistorySummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_name: str
    industry_code: str
    year: int
    risk_level: Optional[str] = None
    created_at: Optional[datetime.datetime] = None


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.post("/diagnose", response_model=DiagnosisOut)
def run_diagnosis(payload: DiagnoseRequest, db: Session = Depends(get_db)):
    """
    POST /diagnose

    High-Level Flow:
    1. Check mandatory identity fields (400).
    2. Resolve industry name from industry_code (400 if unknown).
    3. Resolve the valid benchmark row for (industry_code, year, firm_size_type) (404).
    4. Run the diagnosis engine.
    5. Store the run in diagnosis_history.
    6. Return the DiagnosisResult.
    """
    if not (payload.company_name and payload.company_name.strip()) or not payload.industry_code or not payload.year:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_FIELDS_MESSAGE)

    try:
        industry = get_industry(db, payload.industry_code)
        if industry is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=UNKNOWN_INDUSTRY_MESSAGE)

        benchmark = find_benchmark(db, payload.industry_code, payload.year, payload.firm_size_type)
        if benchmark is None:
            logger.info(
                "No benchmark for %s/%s/%s",
                payload.industry_code, payload.year, payload.firm_size_type,
            )
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NO_BENCHMARK_MESSAGE)

        financials = payload.to_financials()
        result = diagnose(financials, to_benchmark_row(benchmark), industry_name=industry.name)

        record_diagnosis(
            db,
            financials,
            result,
            contact_email=payload.contact_email,
            contact_phone=payload.contact_phone,
        )
        return result.to_dict()

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Diagnosis failed for {payload.company_name}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DIAGNOSIS_FAILED_MESSAGE,
        )


@router.get("/history", response_model=List[HistorySummaryOut])
def get_recent_history(db: Session = Depends(get_db)):
    """
    GET /history

    Returns the most recent diagnoses, newest first (HISTORY_LIMIT rows).
    """
    return list_recent(db, limit=settings.HISTORY_LIMIT)
