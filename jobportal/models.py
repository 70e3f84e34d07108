"""
JobPortal - SQLAlchemy ORM models

Per-client record storage. Each browser profile (client scope) owns a small
set of JSON records addressed by fixed keys: auth token, user, session,
profile and resume metadata.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, UniqueConstraint
from datetime import datetime
from .database import Base


class ClientRecord(Base):
    """One JSON document stored under (client_id, key)."""
    __tablename__ = "client_records"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(String, nullable=False, index=True)
    key = Column(String, nullable=False)
    schema_version = Column(Integer, nullable=False, default=1)
    payload = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("client_id", "key", name="uix_client_record_key"),
    )
