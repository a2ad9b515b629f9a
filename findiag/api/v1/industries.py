"""
industries.py — Reference Data Endpoints (API Layer)

Purpose:
- GET /industries → industry code list (for the input form's select box).
- GET /ratios/{industry_code}/{year}/{firm_size} → the valid industry-average
  ratio row the diagnosis would compare against.

Reference data is loaded by scripts/import_ratios.py; these endpoints are
read-only.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from findiag.core.database import get_db
from findiag.core.logging import get_logger
from findiag.services.benchmarks import find_benchmark, list_industries

logger = get_logger(__name__)

router = APIRouter(tags=["reference"])

NO_BENCHMARK_MESSAGE = "해당 조건의 신보 기준 데이터가 없습니다."

# -----------------------------------------------------------------------------
# Schemas
# -----------------------------------------------------------------------------

class IndustryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    category: str
    description: Optional[str] = None


class BenchmarkOut(BaseModel):
    """Industry-average ratio row, null where the source publishes no value."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    year: int
    industry_code: str
    firm_size_type: str
    current_ratio: Optional[float] = None
    quick_ratio: Optional[float] = None
    debt_ratio: Optional[float] = None
    equity_ratio: Optional[float] = None
    operating_margin: Optional[float] = None
    net_margin: Optional[float] = None
    roa: Optional[float] = None
    roe: Optional[float] = None
    asset_turnover: Optional[float] = None
    inventory_turnover: Optional[float] = None
    receivable_turnover: Optional[float] = None
    interest_coverage: Optional[float] = None
    valid_yn: str


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.get("/industries", response_model=List[IndustryOut])
def get_industries(db: Session = Depends(get_db)):
    """
    GET /industries

    Returns every industry code ordered by code.
    """
    return list_industries(db)


@router.get("/ratios/{industry_code}/{year}/{firm_size}", response_model=BenchmarkOut)
def get_benchmark(industry_code: str, year: int, firm_size: str, db: Session = Depends(get_db)):
    """
    GET /ratios/{industry_code}/{year}/{firm_size}

    Returns:
    - The valid industry-average row for the key.

    Raises:
        404: no valid row for the key
    """
    row = find_benchmark(db, industry_code, year, firm_size)
    if row is None:
        logger.info("No benchmark for %s/%s/%s", industry_code, year, firm_size)
        raise HTTPException(status_code=404, detail=NO_BENCHMARK_MESSAGE)
    return row
