"""
Database model for the sql storage backend
"""

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.sql import func

from .database import Base


class StoredDocument(Base):
    """One JSON document per logical resource key (schedule, clients, recurring-jobs)"""

    __tablename__ = "documents"

    key = Column(String(255), primary_key=True)
    value = Column(JSON, nullable=False)
    description = Column(String(500), nullable=True)  # Last write label

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
