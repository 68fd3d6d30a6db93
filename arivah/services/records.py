# ARIVAH/backend/arivah/services/records.py : typed accessors over the record store

from sqlalchemy import or_
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional, Dict, Any, Tuple
from arivah.models import models
from arivah.constants import TRANSACTION_TYPES
from arivah.database import atomic, store_read
from arivah.services.activity import log_activity
from arivah.services.errors import NotFoundError, ValidationFailure

# Fields of a transfer leg that can only change through the transfer itself
TRANSFER_LOCKED_FIELDS = {"business_id", "date", "type", "amount"}

# Only created in pairs through transfers_service.create_transfer
TRANSFER_LEG_TYPES = {"transfer_in", "transfer_out"}


def _apply(instance, updates: Dict[str, Any]):
    for field, value in updates.items():
        setattr(instance, field, value)
    return instance


def _get_or_404(db: Session, model, entity_id: int, label: str):
    instance = db.get(model, entity_id)
    if instance is None:
        raise NotFoundError(label, entity_id)
    return instance


def _in_window(query, column, start_date: Optional[date], end_date: Optional[date]):
    """Inclusive [start_date, end_date] filter, either bound optional"""
    if start_date and end_date and start_date > end_date:
        raise ValidationFailure("start_date must not be after end_date")
    if start_date:
        query = query.filter(column >= start_date)
    if end_date:
        query = query.filter(column <= end_date)
    return query


# ============================================
# USERS
# ============================================
@store_read()
def get_users(db: Session) -> List[models.User]:
    return db.query(models.User).order_by(models.User.created_at.desc(), models.User.id.desc()).all()

@store_read()
def get_user(db: Session, user_id: int) -> models.User:
    return _get_or_404(db, models.User, user_id, "User")

def create_user(db: Session, data: Dict[str, Any]) -> models.User:
    existing = db.query(models.User).filter(models.User.email == data["email"]).first()
    if existing:
        raise ValidationFailure("Email already in use")
    user = models.User(**data)
    with atomic(db):
        db.add(user)
    db.refresh(user)
    return user


# ============================================
# BUSINESSES
# ============================================
@store_read()
def list_businesses(db: Session) -> List[models.Business]:
    return db.query(models.Business).order_by(models.Business.name).all()

@store_read()
def get_business(db: Session, business_id: int) -> models.Business:
    return _get_or_404(db, models.Business, business_id, "Business")

@store_read()
def get_business_by_name(db: Session, name: str) -> models.Business:
    business = db.query(models.Business).filter(models.Business.name == name).first()
    if not business:
        raise NotFoundError("Business", name)
    return business

@store_read()
def _check_business_name_free(db: Session, name: str, business_id: Optional[int] = None):
    query = db.query(models.Business).filter(models.Business.name == name)
    if business_id:
        query = query.filter(models.Business.id != business_id)
    if query.first():
        raise ValidationFailure(f"A business named '{name}' already exists")

def create_business(db: Session, data: Dict[str, Any], user: models.User) -> models.Business:
    _check_business_name_free(db, data["name"])
    business = models.Business(**data)
    with atomic(db):
        db.add(business)
        db.flush()
        log_activity(db, user, "created_business", "business", business.id, {"name": business.name})
    db.refresh(business)
    return business

def update_business(db: Session, business_id: int, updates: Dict[str, Any], user: models.User) -> models.Business:
    business = get_business(db, business_id)
    if updates.get("name"):
        _check_business_name_free(db, updates["name"], business_id)
    with atomic(db):
        _apply(business, updates)
        log_activity(db, user, "updated_business", "business", business.id, updates)
    db.refresh(business)
    return business


# ============================================
# TRANSACTIONS
# ============================================
@store_read()
def get_transactions(
    db: Session,
    business_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    type: Optional[str] = None,
    category: Optional[str] = None
) -> List[models.Transaction]:
    """Transactions matching every given filter, newest first"""
    query = db.query(models.Transaction)
    if business_id:
        query = query.filter(models.Transaction.business_id == business_id)
    query = _in_window(query, models.Transaction.date, start_date, end_date)
    if type:
        query = query.filter(models.Transaction.type == type)
    if category:
        query = query.filter(models.Transaction.category == category)
    return query.order_by(models.Transaction.date.desc(), models.Transaction.id.desc()).all()

@store_read()
def get_transaction(db: Session, transaction_id: int) -> models.Transaction:
    return _get_or_404(db, models.Transaction, transaction_id, "Transaction")

def create_transaction(db: Session, data: Dict[str, Any], user: models.User) -> models.Transaction:
    if data["type"] not in TRANSACTION_TYPES:
        raise ValidationFailure(f"Unknown transaction type: {data['type']}")
    if data["type"] in TRANSFER_LEG_TYPES:
        raise ValidationFailure("Transfer transactions are created through /transfers")
    business = get_business(db, data["business_id"])
    transaction = models.Transaction(**data, created_by=user.id)
    with atomic(db):
        db.add(transaction)
        db.flush()
        log_activity(db, user, "created_transaction", "transaction", transaction.id, {
            "business": business.name,
            "type": transaction.type,
            "amount": transaction.amount,
            "category": transaction.category,
            "date": transaction.date
        })
    db.refresh(transaction)
    return transaction

def update_transaction(db: Session, transaction_id: int, updates: Dict[str, Any], user: models.User) -> models.Transaction:
    transaction = get_transaction(db, transaction_id)
    if transaction.transfer_id and TRANSFER_LOCKED_FIELDS & set(updates):
        raise ValidationFailure("This transaction belongs to a transfer; edit the transfer instead")
    if "type" in updates and updates["type"] not in TRANSACTION_TYPES:
        raise ValidationFailure(f"Unknown transaction type: {updates['type']}")
    if updates.get("type") in TRANSFER_LEG_TYPES:
        raise ValidationFailure("Transfer transactions are created through /transfers")
    with atomic(db):
        _apply(transaction, updates)
        log_activity(db, user, "updated_transaction", "transaction", transaction.id, updates)
    db.refresh(transaction)
    return transaction

def delete_transaction(db: Session, transaction_id: int, user: models.User) -> None:
    transaction = get_transaction(db, transaction_id)
    if transaction.transfer_id:
        raise ValidationFailure("This transaction belongs to a transfer; delete the transfer instead")
    with atomic(db):
        log_activity(db, user, "deleted_transaction", "transaction", transaction.id, {
            "type": transaction.type,
            "amount": transaction.amount,
            "date": transaction.date
        })
        db.delete(transaction)

@store_read()
def get_transaction_categories(db: Session, business_id: Optional[int] = None) -> List[str]:
    query = db.query(models.Transaction.category).distinct()
    if business_id:
        query = query.filter(models.Transaction.business_id == business_id)
    return sorted(row[0] for row in query.all())


# ============================================
# TRANSFERS
# ============================================
@store_read()
def get_transfers(db: Session, business_id: Optional[int] = None) -> List[models.InterBusinessTransfer]:
    """Transfers touching the business on either side, newest first"""
    query = db.query(models.InterBusinessTransfer)
    if business_id:
        query = query.filter(or_(
            models.InterBusinessTransfer.from_business_id == business_id,
            models.InterBusinessTransfer.to_business_id == business_id
        ))
    return query.order_by(models.InterBusinessTransfer.date.desc(), models.InterBusinessTransfer.id.desc()).all()

@store_read()
def get_transfer(db: Session, transfer_id: int) -> models.InterBusinessTransfer:
    return _get_or_404(db, models.InterBusinessTransfer, transfer_id, "Transfer")

@store_read()
def get_transfers_between(
    db: Session,
    from_business_id: int,
    to_business_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> List[models.InterBusinessTransfer]:
    query = db.query(models.InterBusinessTransfer).filter(
        models.InterBusinessTransfer.from_business_id == from_business_id,
        models.InterBusinessTransfer.to_business_id == to_business_id
    )
    query = _in_window(query, models.InterBusinessTransfer.date, start_date, end_date)
    return query.order_by(models.InterBusinessTransfer.date.desc()).all()


# ============================================
# PERSONAL EXPENSES
# ============================================
@store_read()
def get_personal_expenses(
    db: Session,
    user_id: Optional[int] = None,
    business_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category: Optional[str] = None,
    is_reimbursable: Optional[bool] = None,
    is_reimbursed: Optional[bool] = None
) -> List[models.PersonalExpense]:
    query = db.query(models.PersonalExpense)
    if user_id:
        query = query.filter(models.PersonalExpense.user_id == user_id)
    if business_id:
        query = query.filter(models.PersonalExpense.business_id == business_id)
    query = _in_window(query, models.PersonalExpense.date, start_date, end_date)
    if category:
        query = query.filter(models.PersonalExpense.category == category)
    if is_reimbursable is not None:
        query = query.filter(models.PersonalExpense.is_reimbursable == is_reimbursable)
    if is_reimbursed is not None:
        query = query.filter(models.PersonalExpense.is_reimbursed == is_reimbursed)
    return query.order_by(models.PersonalExpense.date.desc(), models.PersonalExpense.id.desc()).all()

@store_read()
def get_personal_expense(db: Session, expense_id: int) -> models.PersonalExpense:
    return _get_or_404(db, models.PersonalExpense, expense_id, "Personal expense")

def create_personal_expense(db: Session, data: Dict[str, Any], user: models.User) -> models.PersonalExpense:
    if data.get("business_id"):
        get_business(db, data["business_id"])
    expense = models.PersonalExpense(**data, user_id=user.id)
    with atomic(db):
        db.add(expense)
        db.flush()
        log_activity(db, user, "created_personal_expense", "personal_expense", expense.id, {
            "amount": expense.amount,
            "category": expense.category,
            "date": expense.date
        })
    db.refresh(expense)
    return expense

def update_personal_expense(db: Session, expense_id: int, updates: Dict[str, Any], user: models.User) -> models.PersonalExpense:
    expense = get_personal_expense(db, expense_id)
    if updates.get("business_id"):
        get_business(db, updates["business_id"])
    with atomic(db):
        _apply(expense, updates)
        log_activity(db, user, "updated_personal_expense", "personal_expense", expense.id, updates)
    db.refresh(expense)
    return expense

def delete_personal_expense(db: Session, expense_id: int, user: models.User) -> None:
    expense = get_personal_expense(db, expense_id)
    with atomic(db):
        log_activity(db, user, "deleted_personal_expense", "personal_expense", expense.id, {
            "amount": expense.amount,
            "category": expense.category
        })
        db.delete(expense)

@store_read()
def get_personal_expense_categories(db: Session, user_id: Optional[int] = None) -> List[str]:
    query = db.query(models.PersonalExpense.category).distinct()
    if user_id:
        query = query.filter(models.PersonalExpense.user_id == user_id)
    return sorted(row[0] for row in query.all())


# ============================================
# INVESTMENTS
# ============================================
@store_read()
def get_investments(
    db: Session,
    user_id: Optional[int] = None,
    business_id: Optional[int] = None,
    is_settled: Optional[bool] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> List[models.Investment]:
    query = db.query(models.Investment)
    if user_id:
        query = query.filter(models.Investment.user_id == user_id)
    if business_id:
        query = query.filter(models.Investment.business_id == business_id)
    if is_settled is not None:
        query = query.filter(models.Investment.is_settled == is_settled)
    query = _in_window(query, models.Investment.investment_date, start_date, end_date)
    return query.order_by(models.Investment.investment_date.desc(), models.Investment.id.desc()).all()

@store_read()
def get_investment(db: Session, investment_id: int) -> models.Investment:
    return _get_or_404(db, models.Investment, investment_id, "Investment")

def create_investment(db: Session, data: Dict[str, Any], user: models.User) -> models.Investment:
    business = get_business(db, data["business_id"])
    investment = models.Investment(**data, user_id=user.id, is_settled=False)
    with atomic(db):
        db.add(investment)
        db.flush()
        log_activity(db, user, "created_investment", "investment", investment.id, {
            "business": business.name,
            "amount": investment.amount,
            "date": investment.investment_date
        })
    db.refresh(investment)
    return investment

def update_investment(db: Session, investment_id: int, updates: Dict[str, Any], user: models.User) -> models.Investment:
    investment = get_investment(db, investment_id)
    if investment.is_settled and "amount" in updates and updates["amount"] != investment.amount:
        raise ValidationFailure("A settled investment's amount cannot change")
    with atomic(db):
        _apply(investment, updates)
        log_activity(db, user, "updated_investment", "investment", investment.id, updates)
    db.refresh(investment)
    return investment

def delete_investment(db: Session, investment_id: int, user: models.User) -> None:
    investment = get_investment(db, investment_id)
    with atomic(db):
        log_activity(db, user, "deleted_investment", "investment", investment.id, {
            "amount": investment.amount,
            "is_settled": investment.is_settled
        })
        db.delete(investment)

@store_read()
def get_investment_settlements(db: Session, investment_id: int) -> List[models.InvestmentSettlement]:
    get_investment(db, investment_id)
    return db.query(models.InvestmentSettlement).filter(
        models.InvestmentSettlement.investment_id == investment_id
    ).order_by(models.InvestmentSettlement.settlement_date.desc(), models.InvestmentSettlement.id).all()


# ============================================
# PARTNERS
# ============================================
@store_read()
def get_partners(db: Session) -> List[models.Partner]:
    return db.query(models.Partner).order_by(models.Partner.name).all()

@store_read()
def get_partner(db: Session, partner_id: int) -> models.Partner:
    return _get_or_404(db, models.Partner, partner_id, "Partner")

def create_partner(db: Session, data: Dict[str, Any], user: models.User) -> models.Partner:
    partner = models.Partner(**data)
    with atomic(db):
        db.add(partner)
        db.flush()
        log_activity(db, user, "created_partner", "partner", partner.id, {"name": partner.name})
    db.refresh(partner)
    return partner

@store_read()
def get_business_partners(db: Session, business_id: int) -> List[Tuple[models.Partner, float]]:
    """(partner, equity percentage in this business) pairs"""
    get_business(db, business_id)
    rows = db.query(models.BusinessPartner).filter(
        models.BusinessPartner.business_id == business_id
    ).order_by(models.BusinessPartner.id).all()
    return [(row.partner, row.equity_percentage) for row in rows]


# ============================================
# TASKS
# ============================================
@store_read()
def get_tasks(
    db: Session,
    business_id: Optional[int] = None,
    assigned_to: Optional[int] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None
) -> List[models.Task]:
    query = db.query(models.Task)
    if business_id:
        query = query.filter(models.Task.business_id == business_id)
    if assigned_to:
        query = query.filter(models.Task.assigned_to == assigned_to)
    if status:
        query = query.filter(models.Task.status == status)
    if priority:
        query = query.filter(models.Task.priority == priority)
    return query.order_by(models.Task.created_at.desc(), models.Task.id.desc()).all()

@store_read()
def get_task(db: Session, task_id: int) -> models.Task:
    return _get_or_404(db, models.Task, task_id, "Task")

def delete_task(db: Session, task_id: int, user: models.User) -> None:
    task = get_task(db, task_id)
    with atomic(db):
        log_activity(db, user, "deleted_task", "task", task.id, {"title": task.title})
        db.delete(task)
