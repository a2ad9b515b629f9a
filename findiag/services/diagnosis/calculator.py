"""
calculator.py — Financial Ratio Calculation

Purpose:
- Turn raw financial statement figures into the 12 standard ratios.
- Round every ratio to two decimals (half away from zero).

Rules:
- A ratio is computed only when every operand is present and non-zero.
  Otherwise the key is left out of the result; it is never 0 or None.
- Percentage ratios are scaled by 100; turnover/coverage ratios are plain
  multiples.

This module does NOT:
- Touch the database.
- Compare against industry averages (see comparator.py).
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional

from findiag.services.diagnosis.types import RATIO_ORDER, CalculatedRatios, CompanyFinancials

_TWO_PLACES = Decimal("0.01")
# Enough digits for any finite float (max ~1.8e308) plus two decimals
_ROUNDING_CONTEXT = Context(prec=400)


def _usable(value: Optional[float]) -> bool:
    return value is not None and value != 0


def _ratio(numerator: Optional[float], denominator: Optional[float], scale: float = 1.0) -> Optional[float]:
    if not (_usable(numerator) and _usable(denominator)):
        return None
    return numerator / denominator * scale


def _quick_assets(financials: CompanyFinancials) -> Optional[float]:
    """Given quick assets, else current assets minus inventory."""
    if _usable(financials.quick_assets):
        return financials.quick_assets
    if _usable(financials.current_assets) and _usable(financials.inventory):
        return financials.current_assets - financials.inventory
    return None


def calculate_ratios(financials: CompanyFinancials) -> CalculatedRatios:
    """
    Compute the unrounded ratio set.

    Example:
        current_assets=2000, current_liabilities=1500
        → {"current_ratio": 133.333...}
    """
    f = financials

    quick = _quick_assets(f)
    candidates = {
        "current_ratio": _ratio(f.current_assets, f.current_liabilities, 100),
        # current_assets - inventory may legitimately net to zero
        "quick_ratio": (
            quick / f.current_liabilities * 100
            if quick is not None and _usable(f.current_liabilities)
            else None
        ),
        "debt_ratio": _ratio(f.total_liabilities, f.equity, 100),
        "equity_ratio": _ratio(f.equity, f.total_assets, 100),
        "operating_margin": _ratio(f.operating_income, f.sales, 100),
        "net_margin": _ratio(f.net_income, f.sales, 100),
        "roa": _ratio(f.net_income, f.total_assets, 100),
        "roe": _ratio(f.net_income, f.equity, 100),
        "asset_turnover": _ratio(f.sales, f.total_assets),
        "inventory_turnover": _ratio(f.sales, f.inventory),
        "receivable_turnover": _ratio(f.sales, f.receivables),
        "interest_coverage": _ratio(f.operating_income, f.interest_expense),
    }

    return {name: candidates[name] for name in RATIO_ORDER if candidates[name] is not None}


def round_ratio(value: Optional[float]) -> Optional[float]:
    """
    Round to two decimals, halves away from zero.

    Works on the float's shortest decimal representation so that e.g. 1.005
    rounds to 1.01 rather than the binary-float artefact 1.0.
    Magnitudes beyond the default 28-digit decimal precision are supported.
    """
    if value is None or not math.isfinite(value):
        return None
    return float(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT))


def round_all_ratios(ratios: CalculatedRatios) -> CalculatedRatios:
    rounded = {}
    for name, value in ratios.items():
        value = round_ratio(value)
        if value is not None:
            rounded[name] = value
    return rounded


def calculate_rounded_ratios(financials: CompanyFinancials) -> CalculatedRatios:
    """calculate_ratios() followed by round_all_ratios()."""
    return round_all_ratios(calculate_ratios(financials))
