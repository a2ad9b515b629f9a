"""
benchmark_ratio.py — ORM Model for Industry-Average Financial Ratios

Purpose:
- Store the published industry-average ratio set per
  (industry_code, year, firm_size_type).
- Immutable reference data: loaded by scripts/import_ratios.py, never derived
  from user input.

Important Constraint:
- Lookups only consider rows with valid_yn = 'Y'. Superseded rows are kept
  with valid_yn = 'N' rather than deleted.
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String

from findiag.core.database import Base, utcnow


class BenchmarkRatio(Base):
    __tablename__ = "sinbo_ratios"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Lookup key
    year = Column(Integer, nullable=False)
    industry_code = Column(String, ForeignKey("industry_codes.code"), nullable=False)
    firm_size_type = Column(String, nullable=False)  # e.g. 외감 / 비외감

    # Liquidity
    current_ratio = Column(Float, nullable=True)
    quick_ratio = Column(Float, nullable=True)
    # Stability
    debt_ratio = Column(Float, nullable=True)
    equity_ratio = Column(Float, nullable=True)
    # Profitability
    operating_margin = Column(Float, nullable=True)
    net_margin = Column(Float, nullable=True)
    roa = Column(Float, nullable=True)
    roe = Column(Float, nullable=True)
    # Activity
    asset_turnover = Column(Float, nullable=True)
    inventory_turnover = Column(Float, nullable=True)
    receivable_turnover = Column(Float, nullable=True)
    interest_coverage = Column(Float, nullable=True)

    valid_yn = Column(String(1), nullable=False, default="Y")
    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        Index("idx_sinbo_ratios_lookup", "industry_code", "year", "firm_size_type"),
    )

    def __repr__(self):
        return f"<BenchmarkRatio {self.industry_code} | {self.year} | {self.firm_size_type}>"
