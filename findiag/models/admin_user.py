"""
admin_user.py — ORM Model for Administrator Accounts

Purpose:
- Represent staff who may browse stored diagnoses.
- Stores hashed passwords only — never raw.

Used by:
- api/v1/auth.py (login)
- core/security.py (token → admin resolution)
"""

from sqlalchemy import Column, DateTime, Integer, String

from findiag.core.database import Base, utcnow


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Authentication fields
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    # Display
    full_name = Column(String, nullable=True)
    email = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    last_login = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<AdminUser {self.username}>"
