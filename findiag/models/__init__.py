"""
ORM models for the diagnosis service.

Importing this package registers every table on the shared `Base.metadata`.
"""

from findiag.models.admin_user import AdminUser
from findiag.models.benchmark_ratio import BenchmarkRatio
from findiag.models.diagnosis_history import DiagnosisHistory
from findiag.models.industry_code import IndustryCode

__all__ = [
    "AdminUser",
    "BenchmarkRatio",
    "DiagnosisHistory",
    "IndustryCode",
]
