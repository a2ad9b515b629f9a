"""
diagnosis_history.py — ORM Model for Stored Diagnosis Runs

Purpose:
- Record every diagnosis produced by POST /diagnose.
- Keep the raw financial inputs, the computed ratios (calc_* columns) and the
  full serialized DiagnosisResult so admins can review past runs.

This table stores:
- Company identity and benchmark key (industry, firm size, year)
- The 12 raw input figures as submitted
- The 12 computed ratios (rounded, NULL when not computable)
- diagnosis_result: JSON text of DiagnosisResult.to_dict()
- risk_level: duplicated out of the JSON for filtering
- Optional contact details left by the requester
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text

from findiag.core.database import Base, utcnow


class DiagnosisHistory(Base):
    __tablename__ = "diagnosis_history"

    id = Column(Integer, primary_key=True, autoincrement=True)

    company_name = Column(String, nullable=False)
    industry_code = Column(String, ForeignKey("industry_codes.code"), nullable=False)
    firm_size_type = Column(String, nullable=False)
    year = Column(Integer, nullable=False)

    # Submitted financial statement figures
    sales = Column(Float, nullable=True)
    current_assets = Column(Float, nullable=True)
    current_liabilities = Column(Float, nullable=True)
    quick_assets = Column(Float, nullable=True)
    total_assets = Column(Float, nullable=True)
    total_liabilities = Column(Float, nullable=True)
    equity = Column(Float, nullable=True)
    operating_income = Column(Float, nullable=True)
    net_income = Column(Float, nullable=True)
    inventory = Column(Float, nullable=True)
    receivables = Column(Float, nullable=True)
    interest_expense = Column(Float, nullable=True)

    # Computed ratios
    calc_current_ratio = Column(Float, nullable=True)
    calc_quick_ratio = Column(Float, nullable=True)
    calc_debt_ratio = Column(Float, nullable=True)
    calc_equity_ratio = Column(Float, nullable=True)
    calc_operating_margin = Column(Float, nullable=True)
    calc_net_margin = Column(Float, nullable=True)
    calc_roa = Column(Float, nullable=True)
    calc_roe = Column(Float, nullable=True)
    calc_asset_turnover = Column(Float, nullable=True)
    calc_inventory_turnover = Column(Float, nullable=True)
    calc_receivable_turnover = Column(Float, nullable=True)
    calc_interest_coverage = Column(Float, nullable=True)

    # Outcome
    diagnosis_result = Column(Text, nullable=True)
    risk_level = Column(String, nullable=True)

    # Contact details
    contact_email = Column(String, nullable=True)
    contact_phone = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        Index("idx_diagnosis_company", "company_name", "created_at"),
        Index("idx_diagnosis_industry", "industry_code", "year"),
        Index("idx_diagnosis_contact_email", "contact_email"),
        Index("idx_diagnosis_contact_phone", "contact_phone"),
        Index("idx_diagnosis_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<DiagnosisHistory {self.id} | {self.company_name} | {self.risk_level}>"
