"""
types.py — Shared Data Layer for the Diagnosis Engine

Purpose:
- Define the data structures passed between calculator, comparator, risk
  classifier and narrative generator.
- Hold the fixed ratio catalogue: canonical order, display labels, polarity.
- Provide the JSON-like (de)serialization of DiagnosisResult that the history
  table stores and the API returns.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional


# Canonical ratio order: liquidity → stability → profitability → activity
RATIO_ORDER: List[str] = [
    "current_ratio",
    "quick_ratio",
    "debt_ratio",
    "equity_ratio",
    "operating_margin",
    "net_margin",
    "roa",
    "roe",
    "asset_turnover",
    "inventory_turnover",
    "receivable_turnover",
    "interest_coverage",
]

RATIO_LABELS_KR: Dict[str, str] = {
    "current_ratio": "유동비율 (%)",
    "quick_ratio": "당좌비율 (%)",
    "debt_ratio": "부채비율 (%)",
    "equity_ratio": "자기자본비율 (%)",
    "operating_margin": "매출액영업이익률 (%)",
    "net_margin": "매출액순이익률 (%)",
    "roa": "ROA (총자산순이익률, %)",
    "roe": "ROE (자기자본순이익률, %)",
    "asset_turnover": "총자산회전율 (회)",
    "inventory_turnover": "재고자산회전율 (회)",
    "receivable_turnover": "매출채권회전율 (회)",
    "interest_coverage": "이자보상배율 (배)",
}

# debt_ratio is the only ratio where lower is favorable
HIGHER_IS_BETTER: Dict[str, bool] = {name: name != "debt_ratio" for name in RATIO_ORDER}

STATUS_GOOD = "good"
STATUS_WARNING = "warning"
STATUS_DANGER = "danger"

RISK_HIGH = "HIGH"
RISK_MEDIUM = "MEDIUM"
RISK_LOW = "LOW"

# Input figures that feed the ratio formulas
FINANCIAL_FIELDS: List[str] = [
    "sales",
    "current_assets",
    "current_liabilities",
    "quick_assets",
    "total_assets",
    "total_liabilities",
    "equity",
    "operating_income",
    "net_income",
    "inventory",
    "receivables",
    "interest_expense",
]

CalculatedRatios = Dict[str, float]


@dataclass
class CompanyFinancials:
    """
    Company identity plus raw financial statement figures.

    Every figure is optional; a ratio whose operands are missing is simply
    not computed.
    """
    company_name: str
    industry_code: str
    firm_size_type: str
    year: int

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

    def figures(self) -> Dict[str, Optional[float]]:
        return {name: getattr(self, name) for name in FINANCIAL_FIELDS}


@dataclass
class BenchmarkRow:
    """Industry-average ratio set for one (industry_code, year, firm_size_type)."""
    industry_code: str
    year: int
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

    valid_yn: str = "Y"

    def ratios(self) -> CalculatedRatios:
        """Present (non-null) benchmark ratios in canonical order."""
        values = {}
        for name in RATIO_ORDER:
            value = getattr(self, name)
            if value is not None:
                values[name] = value
        return values


@dataclass
class ComparisonResult:
    """One ratio compared against its industry average."""
    ratio_name: str
    ratio_name_kr: str
    company_value: float
    industry_avg: float
    difference_pct: float
    status: str  # "good" | "warning" | "danger"
    comment: str


@dataclass
class DiagnosisResult:
    """
    Aggregated outcome of one diagnosis run.

    This is the unit persisted to diagnosis_history.diagnosis_result and
    returned by POST /diagnose. `to_dict()` uses the external field names
    verbatim; `from_dict()` reverses it exactly.
    """
    company_name: str
    industry_name: str
    year: int
    firm_size_type: str
    calculated_ratios: CalculatedRatios = field(default_factory=dict)
    industry_averages: CalculatedRatios = field(default_factory=dict)
    comparisons: List[ComparisonResult] = field(default_factory=list)
    risk_level: str = RISK_LOW
    overall_comment: str = ""
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiagnosisResult":
        comparison_keys = {f.name for f in fields(ComparisonResult)}
        comparisons = [
            ComparisonResult(**{k: v for k, v in item.items() if k in comparison_keys})
            for item in data.get("comparisons") or []
        ]
        return cls(
            company_name=data["company_name"],
            industry_name=data.get("industry_name") or "",
            year=int(data["year"]),
            firm_size_type=data.get("firm_size_type") or "",
            calculated_ratios=dict(data.get("calculated_ratios") or {}),
            industry_averages=dict(data.get("industry_averages") or {}),
            comparisons=comparisons,
            risk_level=data.get("risk_level") or RISK_LOW,
            overall_comment=data.get("overall_comment") or "",
            recommendations=list(data.get("recommendations") or []),
        )
