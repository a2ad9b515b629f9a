"""
narrative.py — Human-Readable Diagnosis Summary

Purpose:
- Produce the overall comment (one template per risk tier).
- Produce one remediation suggestion per `danger` ratio, in comparison order.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from findiag.services.diagnosis.risk import count_status
from findiag.services.diagnosis.types import (
    RISK_LOW,
    RISK_MEDIUM,
    STATUS_DANGER,
    STATUS_GOOD,
    ComparisonResult,
)

RECOMMENDATIONS: Dict[str, str] = {
    "current_ratio": "유동비율 개선: 단기차입금 상환 또는 유동자산(현금, 매출채권) 증대",
    "quick_ratio": "당좌비율 개선: 현금성자산 확보, 재고자산 감축",
    "debt_ratio": "부채비율 개선: 증자, 이익잉여금 축적, 장기부채 상환",
    "equity_ratio": "자기자본비율 강화: 증자 또는 내부유보를 통한 자본 확충",
    "operating_margin": "영업이익률 개선: 원가절감, 판매가격 조정, 고부가가치 제품 확대",
    "net_margin": "순이익률 개선: 영업외비용 절감, 이자비용 감축",
    "roa": "ROA 제고: 자산 효율화 및 수익성 개선",
    "roe": "ROE 제고: 자기자본 대비 수익성 향상 필요",
    "asset_turnover": "자산회전율 개선: 매출 증대 또는 유휴자산 처분",
    "inventory_turnover": "재고회전율 개선: 재고관리 효율화, 적정재고 유지",
    "receivable_turnover": "채권회전율 개선: 외상매출금 회수 강화, 신용관리",
    "interest_coverage": "이자보상배율 개선: 영업이익 증대 또는 차입금 감축",
}

MAINTAIN_MESSAGE = "현 재무상태 양호, 지속적 모니터링 및 유지 권장"


def overall_comment(comparisons: Sequence[ComparisonResult], risk_level: str) -> str:
    good_count = count_status(comparisons, STATUS_GOOD)
    danger_count = count_status(comparisons, STATUS_DANGER)

    if risk_level == RISK_LOW:
        return f"재무상태가 업종 평균 대비 양호합니다. {good_count}개 지표 우수, 신보 보증심사 시 긍정적 평가 예상됩니다."
    if risk_level == RISK_MEDIUM:
        return f"업종 평균 수준이나 {danger_count}개 지표 개선 필요합니다. 개선 시 신보 보증 가능성 높아집니다."
    return f"업종 평균 대비 취약합니다. {danger_count}개 주요지표 개선이 신보 승인에 필수적입니다."


def recommendations(comparisons: Sequence[ComparisonResult]) -> List[str]:
    advice = [RECOMMENDATIONS[c.ratio_name] for c in comparisons if c.status == STATUS_DANGER]
    return advice or [MAINTAIN_MESSAGE]
