"""
risk.py — Overall Risk Tier Classification

A plain count of `danger` comparisons, no weighting by ratio:
    3 or more → HIGH | exactly 2 → MEDIUM | 0 or 1 → LOW
"""

from __future__ import annotations

from typing import Iterable

from findiag.services.diagnosis.types import (
    RISK_HIGH,
    RISK_LOW,
    RISK_MEDIUM,
    STATUS_DANGER,
    ComparisonResult,
)

HIGH_DANGER_COUNT = 3
MEDIUM_DANGER_COUNT = 2


def count_status(comparisons: Iterable[ComparisonResult], status: str) -> int:
    return sum(1 for c in comparisons if c.status == status)


def classify_risk(comparisons: Iterable[ComparisonResult]) -> str:
    danger_count = count_status(comparisons, STATUS_DANGER)
    if danger_count >= HIGH_DANGER_COUNT:
        return RISK_HIGH
    if danger_count >= MEDIUM_DANGER_COUNT:
        return RISK_MEDIUM
    return RISK_LOW
