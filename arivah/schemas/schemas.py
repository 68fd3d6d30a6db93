# ARIVAH/backend/arivah/schemas/schemas.py

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from typing import Optional, List, Literal
from datetime import date as Date, datetime
from arivah.config import DEFAULT_CURRENCY

TransactionType = Literal[
    "revenue", "expense", "transfer_out", "transfer_in",
    "partner_payout", "capital_injection", "tax", "other"
]
BusinessType = Literal["service", "ecommerce"]
TaskStatus = Literal["pending", "in_progress", "completed", "cancelled"]
TaskPriority = Literal["low", "medium", "high", "urgent"]

# ---------- USER SCHEMAS ----------
class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)

class UserOut(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('created_at')
    def serialize_datetime(self, value: datetime) -> str:
        """Serialize a datetime as an ISO 8601 string."""
        return value.isoformat()

# ---------- ACTIVITY SCHEMAS ----------
class ActivityLogOut(BaseModel):
    id: int
    user_id: int
    action: str
    entity_type: str
    entity_id: Optional[int] = None
    details: Optional[dict] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UserWithStats(UserOut):
    total_transactions: int = 0
    total_tasks: int = 0
    recent_activity: List[ActivityLogOut] = []

# ---------- BUSINESS SCHEMAS ----------
class BusinessCreate(BaseModel):
    name: str = Field(min_length=1)
    type: BusinessType
    currency: str = Field(default=DEFAULT_CURRENCY, min_length=1)

class BusinessUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[BusinessType] = None
    currency: Optional[str] = None

class BusinessOut(BaseModel):
    id: int
    name: str
    type: str
    currency: str

    model_config = ConfigDict(from_attributes=True)

# ---------- TRANSACTION SCHEMAS ----------
class TransactionCreate(BaseModel):
    business_id: int
    date: Date
    type: TransactionType
    category: str = Field(min_length=1)
    amount: float = Field(ge=0)
    payment_method: Optional[str] = None
    description: Optional[str] = None

class TransactionUpdate(BaseModel):
    date: Optional[Date] = None
    type: Optional[TransactionType] = None
    category: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, ge=0)
    payment_method: Optional[str] = None
    description: Optional[str] = None

class TransactionOut(BaseModel):
    id: int
    business_id: int
    date: Date
    type: str
    category: str
    amount: float
    payment_method: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[int] = None
    transfer_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('created_at')
    def serialize_datetime(self, value: datetime) -> str:
        """Serialize a datetime as an ISO 8601 string."""
        return value.isoformat()

# ---------- TRANSFER SCHEMAS ----------
class TransferCreate(BaseModel):
    from_business_id: int
    to_business_id: int
    amount: float = Field(ge=0)
    date: Date
    purpose: str = Field(min_length=1)

class TransferOut(BaseModel):
    id: int
    from_business_id: int
    to_business_id: int
    amount: float
    date: Date
    purpose: str
    created_by: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

class TransferWithLegs(TransferOut):
    legs: List[TransactionOut] = []

# ---------- PARTNER SCHEMAS ----------
class PartnerCreate(BaseModel):
    name: str = Field(min_length=1)
    email: Optional[str] = None
    equity_percentage: float = Field(default=0, ge=0, le=100)

class PartnerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    equity_percentage: Optional[float] = None

class PartnerOut(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    equity_percentage: float

    model_config = ConfigDict(from_attributes=True)

class BusinessPartnerSet(BaseModel):
    partner_id: int
    equity_percentage: float

class BusinessPartnerOut(BaseModel):
    business_id: int
    partner: PartnerOut
    equity_percentage: float

    model_config = ConfigDict(from_attributes=True)

class PartnerShare(BaseModel):
    partner: PartnerOut
    share_amount: float
    equity_percentage: float

class PartnerSharesOut(BaseModel):
    business_id: int
    start_date: Date
    end_date: Date
    total_profit: float
    net_profit: float
    shares: List[PartnerShare]

# ---------- PROFIT SHARING SCHEMAS ----------
class ProfitShareEntry(BaseModel):
    partner_id: int
    partner_share_amount: float = Field(ge=0)
    reinvested_to_other_business_amount: float = Field(default=0, ge=0)
    cash_payout_amount: float = Field(default=0, ge=0)

class ProfitSharingCreate(BaseModel):
    business_id: int
    period_start_date: Date
    period_end_date: Date
    total_profit: float
    entries: List[ProfitShareEntry] = Field(min_length=1)
    note: Optional[str] = None
    is_settled: bool = True

class ProfitSharingUpdate(BaseModel):
    reinvested_to_other_business_amount: Optional[float] = Field(default=None, ge=0)
    cash_payout_amount: Optional[float] = Field(default=None, ge=0)
    note: Optional[str] = None

class ProfitSharingLogOut(BaseModel):
    id: int
    business_id: int
    period_start_date: Date
    period_end_date: Date
    total_profit: float
    partner_id: int
    partner_share_amount: float
    reinvested_to_other_business_amount: float
    cash_payout_amount: float
    note: Optional[str] = None
    is_settled: bool
    created_by: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

# ---------- INVESTMENT SCHEMAS ----------
class InvestmentCreate(BaseModel):
    business_id: int
    amount: float = Field(ge=0)
    investment_date: Date
    description: Optional[str] = None

# No is_settled here: settlement only goes through /investments/{id}/settle
class InvestmentUpdate(BaseModel):
    amount: Optional[float] = Field(default=None, ge=0)
    investment_date: Optional[Date] = None
    description: Optional[str] = None

class InvestmentOut(BaseModel):
    id: int
    user_id: int
    business_id: int
    amount: float
    investment_date: Date
    description: Optional[str] = None
    is_settled: bool
    settled_date: Optional[Date] = None
    settlement_note: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class SettlementShare(BaseModel):
    partner_id: int
    amount: float = Field(ge=0)

class InvestmentSettle(BaseModel):
    shares: List[SettlementShare] = Field(min_length=1)
    settlement_date: Date
    notes: Optional[str] = None

class InvestmentSettlementOut(BaseModel):
    id: int
    investment_id: int
    partner_id: int
    amount: float
    settlement_date: Date
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class InvestmentWithSettlements(InvestmentOut):
    settlements: List[InvestmentSettlementOut] = []

class UnsettledTotals(BaseModel):
    total: float
    count: int

# ---------- PERSONAL EXPENSE SCHEMAS ----------
class PersonalExpenseCreate(BaseModel):
    business_id: Optional[int] = None
    date: Date
    category: str = Field(min_length=1)
    amount: float = Field(ge=0)
    payment_method: Optional[str] = None
    description: Optional[str] = None
    is_reimbursable: bool = False
    is_reimbursed: bool = False
    reimbursed_date: Optional[Date] = None
    tags: Optional[List[str]] = None

class PersonalExpenseUpdate(BaseModel):
    business_id: Optional[int] = None
    date: Optional[Date] = None
    category: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, ge=0)
    payment_method: Optional[str] = None
    description: Optional[str] = None
    is_reimbursable: Optional[bool] = None
    tags: Optional[List[str]] = None

class PersonalExpenseOut(BaseModel):
    id: int
    user_id: int
    business_id: Optional[int] = None
    date: Date
    category: str
    amount: float
    payment_method: Optional[str] = None
    description: Optional[str] = None
    is_reimbursable: bool
    is_reimbursed: bool
    reimbursed_date: Optional[Date] = None
    tags: Optional[List[str]] = None

    model_config = ConfigDict(from_attributes=True)

class CategoryAmount(BaseModel):
    category: str
    amount: float
    count: int

class MonthAmount(BaseModel):
    month: str
    amount: float

class PersonalExpenseStats(BaseModel):
    total_expenses: float
    category_breakdown: List[CategoryAmount]
    monthly_trend: List[MonthAmount]
    reimbursable_pending: float
    reimbursed_total: float

# ---------- TASK SCHEMAS ----------
class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    business_id: Optional[int] = None
    assigned_to: Optional[int] = None
    status: TaskStatus = "pending"
    priority: TaskPriority = "medium"
    due_date: Optional[Date] = None

class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    business_id: Optional[int] = None
    assigned_to: Optional[int] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[Date] = None
    completed_at: Optional[datetime] = None

class TaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    business_id: Optional[int] = None
    assigned_to: Optional[int] = None
    created_by: Optional[int] = None
    status: str
    priority: str
    due_date: Optional[Date] = None
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

# ---------- METRICS SCHEMAS ----------
class BusinessMetrics(BaseModel):
    total_revenue: float
    total_expenses: float
    net_profit: float
    transferred_out: float
    received_in: float
    cash_balance: float
    personal_expenses: float
    total_investments: float
    settled_investments: float

class BusinessMetricsOut(BaseModel):
    business: BusinessOut
    metrics: BusinessMetrics

class ConsolidatedTotals(BaseModel):
    total_revenue: float
    total_expenses: float
    net_profit: float
    total_transfers: float

class ConsolidatedView(BaseModel):
    businesses: List[BusinessMetricsOut]
    consolidated: ConsolidatedTotals

class MonthlyBreakdown(BaseModel):
    month: str
    revenue: float
    expense: float
    profit: float

class ExpenseCategoryAmount(BaseModel):
    category: str
    amount: float
