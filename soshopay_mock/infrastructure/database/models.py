"""SQLAlchemy ORM models for the mock dataset"""

from sqlalchemy import JSON, Column, DateTime, Integer, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class StoredRecord(Base):
    """
    One JSON document in a named collection.

    Collections mirror the top-level keys of the seed dataset (clients,
    loans, payments, ...); position preserves the dataset's ordering.
    """

    __tablename__ = "stored_record"
    __table_args__ = (UniqueConstraint("collection", "record_id", name="uq_stored_record_collection_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(Text, nullable=False, index=True)
    record_id = Column(Text, nullable=False)
    position = Column(Integer, nullable=False)
    data = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
