"""
Tests for risk classification, narrative generation and the full diagnose()
pipeline, including DiagnosisResult serialization round-trips.
"""

import json

import pytest

from findiag.services.diagnosis import (
    BenchmarkRow,
    CompanyFinancials,
    ComparisonResult,
    DiagnosisResult,
    classify_risk,
    diagnose,
    overall_comment,
    recommendations,
)
from findiag.services.diagnosis.narrative import MAINTAIN_MESSAGE, RECOMMENDATIONS


def make_comparison(ratio_name: str, status: str) -> ComparisonResult:
    return ComparisonResult(
        ratio_name=ratio_name,
        ratio_name_kr=ratio_name,
        company_value=1.0,
        industry_avg=1.0,
        difference_pct=0.0,
        status=status,
        comment="",
    )


# ============================================================================
# Risk tier
# ============================================================================

@pytest.mark.parametrize(
    "statuses, expected",
    [
        ([], "LOW"),
        (["good", "warning", "good"], "LOW"),
        (["danger"], "LOW"),
        (["danger", "good", "good", "good", "good"], "LOW"),
        (["danger", "danger"], "MEDIUM"),
        (["danger", "danger", "good", "good", "good", "good"], "MEDIUM"),
        (["danger", "danger", "danger"], "HIGH"),
        (["danger"] * 7 + ["good"] * 5, "HIGH"),
    ],
)
def test_risk_tier_depends_only_on_danger_count(statuses, expected):
    comparisons = [make_comparison(f"r{i}", s) for i, s in enumerate(statuses)]
    assert classify_risk(comparisons) == expected


# ============================================================================
# Narrative
# ============================================================================

def test_recommendations_one_per_danger_in_comparison_order():
    comparisons = [
        make_comparison("current_ratio", "danger"),
        make_comparison("debt_ratio", "good"),
        make_comparison("roe", "danger"),
        make_comparison("interest_coverage", "warning"),
    ]

    assert recommendations(comparisons) == [
        RECOMMENDATIONS["current_ratio"],
        RECOMMENDATIONS["roe"],
    ]


def test_recommendations_without_danger_is_single_maintain_message():
    comparisons = [make_comparison("current_ratio", "good"), make_comparison("roe", "warning")]
    assert recommendations(comparisons) == [MAINTAIN_MESSAGE]
    assert recommendations([]) == [MAINTAIN_MESSAGE]


def test_recommendation_table_covers_every_ratio():
    from findiag.services.diagnosis.types import RATIO_ORDER

    assert set(RECOMMENDATIONS) == set(RATIO_ORDER)


def test_overall_comment_templates_interpolate_counts():
    comparisons = [
        make_comparison("current_ratio", "good"),
        make_comparison("quick_ratio", "good"),
        make_comparison("debt_ratio", "danger"),
        make_comparison("roe", "danger"),
        make_comparison("roa", "danger"),
    ]

    assert "2개 지표 우수" in overall_comment(comparisons, "LOW")
    assert "3개 지표 개선" in overall_comment(comparisons, "MEDIUM")
    assert "3개 주요지표" in overall_comment(comparisons, "HIGH")


# ============================================================================
# Full pipeline
# ============================================================================

@pytest.fixture
def financials() -> CompanyFinancials:
    return CompanyFinancials(
        company_name="테스트전자",
        industry_code="C26",
        firm_size_type="외감",
        year=2023,
        current_assets=2000.0,
        current_liabilities=1500.0,
        total_liabilities=2500.0,
        equity=1500.0,
        total_assets=4000.0,
        sales=5000.0,
        operating_income=100.0,
        net_income=50.0,
    )


@pytest.fixture
def benchmark() -> BenchmarkRow:
    return BenchmarkRow(
        industry_code="C26",
        year=2023,
        firm_size_type="외감",
        current_ratio=120.0,
        debt_ratio=150.0,
        equity_ratio=40.0,
        operating_margin=5.0,
        roe=8.0,
        interest_coverage=4.0,
    )


def test_diagnose_end_to_end(financials, benchmark):
    result = diagnose(financials, benchmark, industry_name="전자부품 제조업")

    by_name = {c.ratio_name: c for c in result.comparisons}

    # company: current 133.33, debt 166.67, equity 37.5, op margin 2.0, roe 3.33
    assert [c.ratio_name for c in result.comparisons] == [
        "current_ratio", "debt_ratio", "equity_ratio", "operating_margin", "roe",
    ]
    assert by_name["current_ratio"].status == "good"
    assert by_name["debt_ratio"].status == "danger"
    assert by_name["equity_ratio"].status == "warning"
    assert by_name["operating_margin"].status == "danger"
    assert by_name["roe"].status == "danger"

    assert result.risk_level == "HIGH"
    assert result.recommendations == [
        RECOMMENDATIONS["debt_ratio"],
        RECOMMENDATIONS["operating_margin"],
        RECOMMENDATIONS["roe"],
    ]
    assert result.industry_name == "전자부품 제조업"
    assert result.calculated_ratios["current_ratio"] == 133.33
    # interest_coverage is only on the benchmark side, so it is reported but not compared
    assert result.industry_averages["interest_coverage"] == 4.0
    assert "interest_coverage" not in by_name


def test_diagnose_with_no_overlap_is_low_risk(benchmark):
    empty = CompanyFinancials(company_name="빈회사", industry_code="C26", firm_size_type="외감", year=2023)
    result = diagnose(empty, benchmark)

    assert result.comparisons == []
    assert result.risk_level == "LOW"
    assert result.recommendations == [MAINTAIN_MESSAGE]
    assert result.calculated_ratios == {}


def test_to_dict_uses_external_field_names(financials, benchmark):
    data = diagnose(financials, benchmark).to_dict()

    assert set(data) == {
        "company_name", "industry_name", "year", "firm_size_type",
        "calculated_ratios", "industry_averages", "comparisons",
        "risk_level", "overall_comment", "recommendations",
    }
    assert set(data["comparisons"][0]) == {
        "ratio_name", "ratio_name_kr", "company_value", "industry_avg",
        "difference_pct", "status", "comment",
    }


def test_json_round_trip_preserves_every_field(financials, benchmark):
    result = diagnose(financials, benchmark, industry_name="전자부품 제조업")

    restored = DiagnosisResult.from_dict(json.loads(json.dumps(result.to_dict(), ensure_ascii=False)))

    assert restored == result
