"""SQLAlchemy models for the Parts Search schema."""

from sqlalchemy import Column, Text, DateTime, Index, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func


Base = declarative_base()


class Part(Base):
    """Parts table model."""
    __tablename__ = 'parts'

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text('gen_random_uuid()'))
    # "C" collation gives byte-wise ordering, so prefix matches sort after the exact match
    sort_key = Column(Text(collation='C'), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('parts_sort_key_id', 'sort_key', 'id'),
    )
