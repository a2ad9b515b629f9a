"""
Tests for the ratio comparator.

Covers the ±10% classification band for both polarities (including the
exact boundary values), filtering of one-sided ratios and canonical ordering.
"""

import pytest

from findiag.services.diagnosis.comparator import (
    classify_difference,
    compare_ratio,
    compare_ratios,
    difference_pct,
)
from findiag.services.diagnosis.types import RATIO_ORDER


# ============================================================================
# Classification bands
# ============================================================================

@pytest.mark.parametrize(
    "diff, expected",
    [
        (25.0, "good"),
        (10.0, "good"),       # boundary is inclusive on the good side
        (9.99, "warning"),
        (0.0, "warning"),
        (-10.0, "warning"),   # boundary is inclusive on the warning side
        (-10.01, "danger"),
        (-50.0, "danger"),
    ],
)
def test_higher_is_better_bands(diff, expected):
    assert classify_difference(diff, higher_is_better=True) == expected


@pytest.mark.parametrize(
    "diff, expected",
    [
        (-25.0, "good"),
        (-10.0, "good"),      # boundary is inclusive on the good side
        (-9.99, "warning"),
        (0.0, "warning"),
        (10.0, "warning"),    # boundary is inclusive on the warning side
        (10.01, "danger"),
        (50.0, "danger"),
    ],
)
def test_lower_is_better_bands(diff, expected):
    assert classify_difference(diff, higher_is_better=False) == expected


def test_exact_boundaries_through_compare_ratio():
    assert compare_ratio("current_ratio", 110.0, 100.0).status == "good"
    assert compare_ratio("current_ratio", 90.0, 100.0).status == "warning"
    assert compare_ratio("debt_ratio", 90.0, 100.0).status == "good"
    assert compare_ratio("debt_ratio", 110.0, 100.0).status == "warning"


# ============================================================================
# Worked examples
# ============================================================================

def test_current_ratio_above_average_is_good():
    result = compare_ratio("current_ratio", 133.33, 120.0)

    assert result.difference_pct == 11.11
    assert result.status == "good"


def test_huge_company_value_against_tiny_average():
    result = compare_ratio("current_ratio", 1e24, 0.01)

    assert result.company_value == 1e24
    assert result.industry_avg == 0.01
    assert result.difference_pct == pytest.approx(1e28)
    assert result.status == "good"
    assert result.company_value == 133.33
    assert result.industry_avg == 120.0
    assert result.ratio_name_kr == "유동비율 (%)"
    assert "11.1%" in result.comment
    assert "우수" in result.comment


def test_debt_ratio_above_average_is_danger():
    result = compare_ratio("debt_ratio", 166.67, 150.0)

    assert result.difference_pct == 11.11
    assert result.status == "danger"
    assert "높아" in result.comment
    assert "개선" in result.comment


def test_classification_uses_unrounded_difference():
    # diff is 9.996%: displayed as 10.0 but still a warning
    result = compare_ratio("roa", 10.9996, 10.0)
    assert result.difference_pct == 10.0
    assert result.status == "warning"


def test_warning_comment_is_neutral():
    assert compare_ratio("roe", 8.2, 8.0).comment == "업종 평균 수준입니다."


def test_difference_pct_formula():
    assert difference_pct(90.0, 120.0) == pytest.approx(-25.0)


# ============================================================================
# Filtering and ordering
# ============================================================================

def test_only_ratios_present_on_both_sides_are_compared():
    company = {"roe": 10.0, "current_ratio": 130.0, "debt_ratio": 100.0}
    industry = {"current_ratio": 120.0, "roe": 8.0, "interest_coverage": 3.0}

    results = compare_ratios(company, industry)

    assert [r.ratio_name for r in results] == ["current_ratio", "roe"]


def test_zero_or_null_values_are_skipped():
    company = {"current_ratio": 130.0, "roa": 0.0, "roe": 5.0}
    industry = {"current_ratio": 0.0, "roa": 3.0, "roe": None}

    assert compare_ratios(company, industry) == []


def test_results_follow_canonical_order():
    values = {name: 1.0 for name in reversed(RATIO_ORDER)}
    results = compare_ratios(values, dict(values))

    assert [r.ratio_name for r in results] == RATIO_ORDER
    assert all(r.status == "warning" for r in results)
