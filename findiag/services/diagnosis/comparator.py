"""
comparator.py — Company vs Industry-Average Ratio Comparison

Purpose:
- Compare each computed ratio against the matching industry average.
- Classify every comparison as good / warning / danger with a ±10% band.

Classification (d = (company - industry) / industry × 100, unrounded):
    higher is better:  d >= 10 → good | -10 <= d < 10 → warning | d < -10 → danger
    lower is better:   d <= -10 → good | -10 < d <= 10 → warning | d > 10 → danger

Only ratios present (non-null, non-zero) on BOTH sides are compared. Output
order is always RATIO_ORDER.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

from findiag.services.diagnosis.calculator import round_ratio
from findiag.services.diagnosis.types import (
    HIGHER_IS_BETTER,
    RATIO_LABELS_KR,
    RATIO_ORDER,
    STATUS_DANGER,
    STATUS_GOOD,
    STATUS_WARNING,
    ComparisonResult,
)

THRESHOLD_PCT = 10.0


def difference_pct(company_value: float, industry_avg: float) -> float:
    """Relative gap to the industry average, in percent (unrounded)."""
    return (company_value - industry_avg) / industry_avg * 100


def classify_difference(diff: float, higher_is_better: bool) -> str:
    if higher_is_better:
        if diff >= THRESHOLD_PCT:
            return STATUS_GOOD
        if diff >= -THRESHOLD_PCT:
            return STATUS_WARNING
        return STATUS_DANGER

    if diff <= -THRESHOLD_PCT:
        return STATUS_GOOD
    if diff <= THRESHOLD_PCT:
        return STATUS_WARNING
    return STATUS_DANGER


def _comment(status: str, diff: float) -> str:
    if status == STATUS_WARNING:
        return "업종 평균 수준입니다."

    gap = f"{abs(diff):.1f}%"
    direction = "높아" if diff > 0 else "낮아"
    verdict = "우수합니다." if status == STATUS_GOOD else "개선 필요합니다."
    return f"업종 평균보다 {gap} {direction} {verdict}"


def compare_ratio(ratio_name: str, company_value: float, industry_avg: float) -> ComparisonResult:
    higher_is_better = HIGHER_IS_BETTER[ratio_name]
    diff = difference_pct(company_value, industry_avg)
    status = classify_difference(diff, higher_is_better)

    return ComparisonResult(
        ratio_name=ratio_name,
        ratio_name_kr=RATIO_LABELS_KR[ratio_name],
        company_value=round_ratio(company_value),
        industry_avg=round_ratio(industry_avg),
        difference_pct=round_ratio(diff),
        status=status,
        comment=_comment(status, diff),
    )


def _paired(
    company_ratios: Mapping[str, Optional[float]],
    industry_ratios: Mapping[str, Optional[float]],
) -> List[Tuple[str, float, float]]:
    pairs = []
    for name in RATIO_ORDER:
        company_value = company_ratios.get(name)
        industry_avg = industry_ratios.get(name)
        # A zero average would make the relative gap undefined
        if not company_value or not industry_avg:
            continue
        pairs.append((name, company_value, industry_avg))
    return pairs


def compare_ratios(
    company_ratios: Mapping[str, Optional[float]],
    industry_ratios: Mapping[str, Optional[float]],
) -> List[ComparisonResult]:
    """
    Compare every ratio available on both sides.

    Args:
        company_ratios: Output of calculator.calculate_rounded_ratios()
        industry_ratios: BenchmarkRow.ratios() (or any ratio mapping)

    Returns:
        ComparisonResult list in canonical ratio order
    """
    return [compare_ratio(name, company, industry) for name, company, industry in _paired(company_ratios, industry_ratios)]
