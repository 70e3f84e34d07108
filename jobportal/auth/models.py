"""
JobPortal - Authentication Models

SQLAlchemy model for registered accounts.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from datetime import datetime

from ..database import Base


class Account(Base):
    """Registered user account with recorded consents."""
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String)
    terms_consent = Column(Boolean, default=False, nullable=False)
    privacy_consent = Column(Boolean, default=False, nullable=False)
    marketing_consent = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
