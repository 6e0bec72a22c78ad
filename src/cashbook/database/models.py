"""SQLAlchemy models for cashbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default="Asset")
    balance = Column(Numeric(14, 2), nullable=False, default=0)
    disabled = Column(Boolean, default=False, nullable=False)
    role = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Unique constraint on user_id + name
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_user_account_name"),)

    # Relationships
    transactions = relationship(
        "Transaction", back_populates="account", foreign_keys="Transaction.account_id"
    )


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    extra_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    type = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    note = Column(String, nullable=True)
    account_type = Column(String, nullable=True)
    account_name = Column(String, nullable=True)
    account_role = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions", foreign_keys=[account_id])
    extra_account = relationship("Account", foreign_keys=[extra_account_id])


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
