"""
engine.py — Diagnosis Orchestrator

Purpose:
- Run the full diagnosis pipeline for one company:
    1. calculator  → rounded ratio set
    2. comparator  → per-ratio judgments against the benchmark row
    3. risk        → overall tier
    4. narrative   → overall comment + recommendations
- Assemble the DiagnosisResult returned to the API layer.

The caller resolves and validates everything beforehand (identity fields,
industry name, benchmark row). This module performs no I/O.
"""

from __future__ import annotations

from findiag.core.logging import get_logger
from findiag.services.diagnosis.calculator import calculate_rounded_ratios
from findiag.services.diagnosis.comparator import compare_ratios
from findiag.services.diagnosis.narrative import overall_comment, recommendations
from findiag.services.diagnosis.risk import classify_risk
from findiag.services.diagnosis.types import BenchmarkRow, CompanyFinancials, DiagnosisResult

logger = get_logger(__name__)


def diagnose(
    financials: CompanyFinancials,
    benchmark: BenchmarkRow,
    industry_name: str = "",
) -> DiagnosisResult:
    """
    Diagnose a company's financial statements against its industry average.

    Args:
        financials: Company identity + raw figures
        benchmark: Matching industry-average row (already looked up)
        industry_name: Display name of financials.industry_code

    Returns:
        DiagnosisResult
    """
    company_ratios = calculate_rounded_ratios(financials)
    industry_ratios = benchmark.ratios()

    comparisons = compare_ratios(company_ratios, industry_ratios)
    risk_level = classify_risk(comparisons)

    logger.debug(
        "Diagnosed %s (%s/%s/%s): %d comparisons, risk=%s",
        financials.company_name,
        financials.industry_code,
        financials.year,
        financials.firm_size_type,
        len(comparisons),
        risk_level,
    )

    return DiagnosisResult(
        company_name=financials.company_name,
        industry_name=industry_name,
        year=financials.year,
        firm_size_type=financials.firm_size_type,
        calculated_ratios=company_ratios,
        industry_averages=industry_ratios,
        comparisons=comparisons,
        risk_level=risk_level,
        overall_comment=overall_comment(comparisons, risk_level),
        recommendations=recommendations(comparisons),
    )
