# ARIVAH/backend/arivah/services/investments_service.py : investment settlement

from sqlalchemy.orm import Session
from datetime import date
from typing import List, Dict, Any, Optional
from arivah.models import models
from arivah.config import SETTLEMENT_TOLERANCE
from arivah.database import atomic
from arivah.services import records
from arivah.services.activity import log_activity
from arivah.services.errors import ValidationFailure
import logging

logger = logging.getLogger(__name__)


def validate_settlement_shares(investment: models.Investment, shares: List[Dict[str, Any]]):
    """Shares must be non-negative, one per partner, and add up to the investment"""
    if not shares:
        raise ValidationFailure("At least one partner share is required")

    partner_ids = [share["partner_id"] for share in shares]
    if len(set(partner_ids)) != len(partner_ids):
        raise ValidationFailure("Each partner can only receive one share")
    if any(share["amount"] < 0 for share in shares):
        raise ValidationFailure("Share amounts cannot be negative")

    total = sum(share["amount"] for share in shares)
    if abs(total - investment.amount) > SETTLEMENT_TOLERANCE:
        raise ValidationFailure(
            f"Shares total {total:.2f} but the investment is {investment.amount:.2f}"
        )


def settle_investment(
    db: Session,
    investment_id: int,
    shares: List[Dict[str, Any]],
    settlement_date: date,
    user: models.User,
    notes: Optional[str] = None
) -> List[models.InvestmentSettlement]:
    """
    Split an investment between partners and close it.

    Everything is checked before writing. One settlement row is inserted per
    non-zero share and the investment is flagged settled in the same
    transaction; a failure leaves neither the rows nor the flag behind.
    """
    investment = records.get_investment(db, investment_id)
    if investment.is_settled:
        raise ValidationFailure("This investment is already settled")
    validate_settlement_shares(investment, shares)
    for share in shares:
        records.get_partner(db, share["partner_id"])

    settlements = []
    with atomic(db):
        for share in shares:
            if share["amount"] == 0:
                continue
            settlement = models.InvestmentSettlement(
                investment_id=investment.id,
                partner_id=share["partner_id"],
                amount=share["amount"],
                settlement_date=settlement_date,
                notes=notes
            )
            db.add(settlement)
            settlements.append(settlement)

        investment.is_settled = True
        investment.settled_date = settlement_date
        investment.settlement_note = notes
        db.flush()
        log_activity(db, user, "settled_investment", "investment", investment.id, {
            "amount": investment.amount,
            "settlement_date": settlement_date,
            "shares": [{"partner_id": s.partner_id, "amount": s.amount} for s in settlements]
        })

    logger.info(f"💰 Investment {investment.id} settled between {len(settlements)} partner(s)")
    for settlement in settlements:
        db.refresh(settlement)
    return settlements


def get_investment_with_settlements(db: Session, investment_id: int) -> Dict:
    investment = records.get_investment(db, investment_id)
    settlements = records.get_investment_settlements(db, investment_id)
    return {
        **{column.name: getattr(investment, column.name) for column in models.Investment.__table__.columns},
        "settlements": settlements
    }


def get_unsettled_investments(
    db: Session,
    user_id: Optional[int] = None,
    business_id: Optional[int] = None
) -> Dict:
    """Total and count of investments still waiting for settlement"""
    investments = records.get_investments(db, user_id=user_id, business_id=business_id, is_settled=False)
    return {
        "total": sum(i.amount for i in investments),
        "count": len(investments)
    }
