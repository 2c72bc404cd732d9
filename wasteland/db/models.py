"""SQLAlchemy declarative base for all ORM models."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Base class for all database models."""


class PlayerModel(Base):
    """ORM model for players."""

    __tablename__ = "players"

    wallet: Mapped[str] = mapped_column(String, primary_key=True)
    caps: Mapped[int] = mapped_column(Integer, default=0)
    level: Mapped[int] = mapped_column(Integer, default=1)
    xp: Mapped[int] = mapped_column(Integer, default=0)
    hp: Mapped[int] = mapped_column(Integer, default=100)
    max_hp: Mapped[int] = mapped_column(Integer, default=100)
    last_claim_ms: Mapped[int] = mapped_column(BigInteger, default=0)
    faction_rep: Mapped[dict] = mapped_column(JSON, default=dict)
    inventory: Mapped[list] = mapped_column(JSON, default=list)
    gear: Mapped[dict] = mapped_column(JSON, default=dict)


class SettlementModel(Base):
    """ORM model for currency settlement attempts (reconciliation ledger)."""

    __tablename__ = "settlements"

    claim_id: Mapped[str] = mapped_column(String, primary_key=True)
    wallet: Mapped[str] = mapped_column(String, nullable=False, index=True)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    # simulated | settled | failed | timeout
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    transaction_id: Mapped[str | None] = mapped_column(String, nullable=True)
    error: Mapped[str | None] = mapped_column(String, nullable=True)
    detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    attempts: Mapped[int] = mapped_column(Integer, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
