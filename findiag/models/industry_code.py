"""
industry_code.py — ORM Model for Industry Classification Codes

Purpose:
- Map an industry code (e.g., "C26") to its display name and category.
- Every benchmark row and every stored diagnosis references one of these codes.

Used by:
- GET /industries (listing)
- POST /diagnose (industry validation + industry_name resolution)
"""

from sqlalchemy import Column, String, Text

from findiag.core.database import Base


class IndustryCode(Base):
    __tablename__ = "industry_codes"

    code = Column(String, primary_key=True)

    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self):
        return f"<IndustryCode {self.code} | {self.name}>"
