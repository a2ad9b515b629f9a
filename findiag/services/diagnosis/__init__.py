"""
diagnosis — Financial ratio diagnosis engine.

Pure, synchronous pipeline: raw figures → ratios → industry comparison →
risk tier → narrative. Safe to call concurrently; no shared state.
"""

from findiag.services.diagnosis.calculator import calculate_ratios, calculate_rounded_ratios, round_ratio
from findiag.services.diagnosis.comparator import compare_ratio, compare_ratios
from findiag.services.diagnosis.engine import diagnose
from findiag.services.diagnosis.narrative import overall_comment, recommendations
from findiag.services.diagnosis.risk import classify_risk
from findiag.services.diagnosis.types import (
    RATIO_ORDER,
    BenchmarkRow,
    CompanyFinancials,
    ComparisonResult,
    DiagnosisResult,
)

__all__ = [
    "RATIO_ORDER",
    "BenchmarkRow",
    "CompanyFinancials",
    "ComparisonResult",
    "DiagnosisResult",
    "calculate_ratios",
    "calculate_rounded_ratios",
    "classify_risk",
    "compare_ratio",
    "compare_ratios",
    "diagnose",
    "overall_comment",
    "recommendations",
    "round_ratio",
]
