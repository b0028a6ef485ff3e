"""SQLAlchemy ORM models for the ledger operation journal"""

from sqlalchemy import Column, DateTime, Integer, JSON, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class LedgerEvent(Base):
    """Append-only record of a committed ledger operation"""

    __tablename__ = "ledger_event"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_type = Column(Text, nullable=False, index=True)
    principal = Column(Text, nullable=False, index=True)
    credit_line_address = Column(Text, nullable=True, index=True)
    underwriter = Column(Text, nullable=True, index=True)
    amount = Column(Text, nullable=False)  # WAD integer as decimal string, exceeds BIGINT
    payload = Column(JSON, nullable=True)
    request_id = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
