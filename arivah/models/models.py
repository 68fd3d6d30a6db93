# ARIVAH/backend/arivah/models/models.py

from sqlalchemy import (
    Column, Integer, String, Float, ForeignKey, DateTime, Date, Boolean, Text, JSON,
    UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship
from datetime import datetime
from arivah.database import Base
from arivah.config import DEFAULT_CURRENCY

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class Business(Base):
    __tablename__ = "businesses"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=False)
    currency = Column(String, nullable=False, default=DEFAULT_CURRENCY)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    transactions = relationship("Transaction", back_populates="business", cascade="all, delete-orphan")
    partners = relationship("BusinessPartner", back_populates="business", cascade="all, delete-orphan")

class Partner(Base):
    __tablename__ = "partners"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    equity_percentage = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        CheckConstraint("equity_percentage >= 0 AND equity_percentage <= 100", name="ck_partner_equity_range"),
    )

class BusinessPartner(Base):
    __tablename__ = "business_partners"
    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False)
    partner_id = Column(Integer, ForeignKey("partners.id"), nullable=False)
    equity_percentage = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    business = relationship("Business", back_populates="partners")
    partner = relationship("Partner")

    __table_args__ = (
        UniqueConstraint("business_id", "partner_id", name="uq_business_partner"),
    )

class InterBusinessTransfer(Base):
    __tablename__ = "inter_business_transfers"
    id = Column(Integer, primary_key=True)
    from_business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False)
    to_business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    amount = Column(Float, nullable=False)
    purpose = Column(String, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    from_business = relationship("Business", foreign_keys=[from_business_id])
    to_business = relationship("Business", foreign_keys=[to_business_id])
    # The transfer_out / transfer_in pair
    legs = relationship("Transaction", back_populates="transfer", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("from_business_id <> to_business_id", name="ck_transfer_distinct_businesses"),
    )

class Transaction(Base):
    __tablename__ = "transactions"
    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    payment_method = Column(String, nullable=True)
    description = Column(String, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    transfer_id = Column(Integer, ForeignKey("inter_business_transfers.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    business = relationship("Business", back_populates="transactions")
    transfer = relationship("InterBusinessTransfer", back_populates="legs")

class Investment(Base):
    __tablename__ = "investments"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    investment_date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=True)
    is_settled = Column(Boolean, nullable=False, default=False)
    settled_date = Column(Date, nullable=True)
    settlement_note = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    business = relationship("Business")
    user = relationship("User")
    settlements = relationship("InvestmentSettlement", back_populates="investment", cascade="all, delete-orphan")

class InvestmentSettlement(Base):
    __tablename__ = "investment_settlements"
    id = Column(Integer, primary_key=True)
    investment_id = Column(Integer, ForeignKey("investments.id"), nullable=False, index=True)
    partner_id = Column(Integer, ForeignKey("partners.id"), nullable=False)
    amount = Column(Float, nullable=False)
    settlement_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    investment = relationship("Investment", back_populates="settlements")
    partner = relationship("Partner")

class PersonalExpense(Base):
    __tablename__ = "personal_expenses"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=True, index=True)
    date = Column(Date, nullable=False, index=True)
    category = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    payment_method = Column(String, nullable=True)
    description = Column(String, nullable=True)
    is_reimbursable = Column(Boolean, nullable=False, default=False)
    is_reimbursed = Column(Boolean, nullable=False, default=False)
    reimbursed_date = Column(Date, nullable=True)
    tags = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    business = relationship("Business")

class ProfitSharingLog(Base):
    __tablename__ = "profit_sharing_logs"
    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    period_start_date = Column(Date, nullable=False)
    period_end_date = Column(Date, nullable=False)
    total_profit = Column(Float, nullable=False)
    partner_id = Column(Integer, ForeignKey("partners.id"), nullable=False)
    partner_share_amount = Column(Float, nullable=False)
    reinvested_to_other_business_amount = Column(Float, nullable=False, default=0)
    cash_payout_amount = Column(Float, nullable=False, default=0)
    note = Column(Text, nullable=True)
    is_settled = Column(Boolean, nullable=False, default=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    business = relationship("Business")
    partner = relationship("Partner")

class Task(Base):
    __tablename__ = "tasks"
    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=True)
    assigned_to = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    status = Column(String, nullable=False, default="pending")
    priority = Column(String, nullable=False, default="medium")
    due_date = Column(Date, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class ActivityLog(Base):
    __tablename__ = "activity_logs"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    action = Column(String, nullable=False)
    entity_type = Column(String, nullable=False)
    entity_id = Column(Integer, nullable=True)
    details = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
