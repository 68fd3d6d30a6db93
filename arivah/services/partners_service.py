# ARIVAH/backend/arivah/services/partners_service.py : partner equity, profit shares and profit sharing logs

from sqlalchemy.orm import Session
from datetime import date
from typing import List, Dict, Any, Optional
from arivah.models import models
from arivah.config import SETTLEMENT_TOLERANCE
from arivah.database import atomic, store_read
from arivah.services import records
from arivah.services.activity import log_activity
from arivah.services.classification import signed_total
from arivah.services.errors import NotFoundError, ValidationFailure
from arivah.services.metrics_service import MetricsService
import logging

logger = logging.getLogger(__name__)


def _check_equity(equity_percentage: float):
    if equity_percentage is None or not 0 <= equity_percentage <= 100:
        raise ValidationFailure("Equity percentage must be between 0 and 100")


# ============================================
# EQUITY
# ============================================
def update_partner(db: Session, partner_id: int, updates: Dict[str, Any], user: models.User) -> models.Partner:
    partner = records.get_partner(db, partner_id)
    if "equity_percentage" in updates:
        _check_equity(updates["equity_percentage"])
    with atomic(db):
        for field, value in updates.items():
            setattr(partner, field, value)
        log_activity(db, user, "updated_partner", "partner", partner.id, updates)
    db.refresh(partner)
    return partner


def set_business_partner(
    db: Session,
    business_id: int,
    partner_id: int,
    equity_percentage: float,
    user: models.User
) -> models.BusinessPartner:
    """
    Attach a partner to a business, or change their equity there.

    Equity may be left partly unassigned but a business can never hand out
    more than 100% across its partners.
    """
    _check_equity(equity_percentage)
    records.get_business(db, business_id)
    partner = records.get_partner(db, partner_id)

    with store_read():
        others = db.query(models.BusinessPartner).filter(
            models.BusinessPartner.business_id == business_id,
            models.BusinessPartner.partner_id != partner_id
        ).all()
        link = db.query(models.BusinessPartner).filter(
            models.BusinessPartner.business_id == business_id,
            models.BusinessPartner.partner_id == partner_id
        ).first()
    allocated = sum(row.equity_percentage for row in others)
    if allocated + equity_percentage > 100 + 1e-9:
        raise ValidationFailure(
            f"Equity would total {allocated + equity_percentage:g}% for this business (max 100%)"
        )

    with atomic(db):
        if link is None:
            link = models.BusinessPartner(business_id=business_id, partner_id=partner_id)
            db.add(link)
        link.equity_percentage = equity_percentage
        db.flush()
        log_activity(db, user, "updated_business_partner", "partner", partner.id, {
            "business_id": business_id,
            "partner": partner.name,
            "equity_percentage": equity_percentage
        })
    db.refresh(link)
    return link


# ============================================
# PROFIT SHARES
# ============================================
def calculate_partner_shares(db: Session, business_id: int, start_date: date, end_date: date) -> Dict:
    """
    Each partner's cut of the period's profit.

    The period profit is the cash-signed total of the business's transactions
    dated in [start_date, end_date]. Shares are profit x equity / 100 with no
    renormalisation, so partial equity leaves part of the profit unassigned.
    The classification-based net profit for the same window is returned next
    to it; the two differ when transfers or "other" rows are present.
    """
    records.get_business(db, business_id)

    transactions = records.get_transactions(
        db, business_id=business_id, start_date=start_date, end_date=end_date
    )
    total_profit = signed_total(transactions)
    net_profit = MetricsService(db).compute_business_metrics(business_id, start_date, end_date)["net_profit"]

    shares = [
        {
            "partner": partner,
            "share_amount": total_profit * equity / 100,
            "equity_percentage": equity
        }
        for partner, equity in records.get_business_partners(db, business_id)
    ]
    return {
        "business_id": business_id,
        "start_date": start_date,
        "end_date": end_date,
        "total_profit": total_profit,
        "net_profit": net_profit,
        "shares": shares
    }


# ============================================
# PROFIT SHARING LOGS (settlement recorder)
# ============================================
def _check_split(share: float, reinvested: float, payout: float):
    if abs(share - (reinvested + payout)) > SETTLEMENT_TOLERANCE:
        raise ValidationFailure(
            f"Reinvested ({reinvested:.2f}) plus cash payout ({payout:.2f}) "
            f"must equal the partner share ({share:.2f})"
        )


def record_profit_sharing(
    db: Session,
    business_id: int,
    period_start_date: date,
    period_end_date: date,
    total_profit: float,
    entries: List[Dict[str, Any]],
    user: models.User,
    note: Optional[str] = None,
    is_settled: bool = True
) -> List[models.ProfitSharingLog]:
    """Append one log row per partner entry; all rows are written or none"""
    if period_start_date > period_end_date:
        raise ValidationFailure("period_start_date must not be after period_end_date")
    if not entries:
        raise ValidationFailure("At least one partner entry is required")
    business = records.get_business(db, business_id)

    seen = set()
    for entry in entries:
        if entry["partner_id"] in seen:
            raise ValidationFailure(f"Partner {entry['partner_id']} appears twice")
        seen.add(entry["partner_id"])
        if entry["partner_share_amount"] < 0:
            raise ValidationFailure("Partner share cannot be negative")
        records.get_partner(db, entry["partner_id"])
        _check_split(
            entry["partner_share_amount"],
            entry.get("reinvested_to_other_business_amount", 0),
            entry.get("cash_payout_amount", 0)
        )

    logs = []
    with atomic(db):
        for entry in entries:
            log = models.ProfitSharingLog(
                business_id=business_id,
                period_start_date=period_start_date,
                period_end_date=period_end_date,
                total_profit=total_profit,
                partner_id=entry["partner_id"],
                partner_share_amount=entry["partner_share_amount"],
                reinvested_to_other_business_amount=entry.get("reinvested_to_other_business_amount", 0),
                cash_payout_amount=entry.get("cash_payout_amount", 0),
                note=note,
                is_settled=is_settled,
                created_by=user.id
            )
            db.add(log)
            logs.append(log)
        db.flush()
        for log in logs:
            log_activity(db, user, "created_profit_sharing", "profit_sharing", log.id, {
                "business": business.name,
                "partner_id": log.partner_id,
                "partner_share_amount": log.partner_share_amount,
                "period_start_date": period_start_date,
                "period_end_date": period_end_date
            })

    logger.info(f"💰 Profit sharing recorded for {business.name}: {len(logs)} partner(s), profit {total_profit:.2f}")
    for log in logs:
        db.refresh(log)
    return logs


@store_read()
def get_profit_sharing_logs(db: Session, business_id: Optional[int] = None) -> List[models.ProfitSharingLog]:
    query = db.query(models.ProfitSharingLog)
    if business_id:
        query = query.filter(models.ProfitSharingLog.business_id == business_id)
    return query.order_by(models.ProfitSharingLog.period_end_date.desc(), models.ProfitSharingLog.id.desc()).all()


@store_read()
def get_profit_sharing_log(db: Session, log_id: int) -> models.ProfitSharingLog:
    log = db.get(models.ProfitSharingLog, log_id)
    if log is None:
        raise NotFoundError("Profit sharing log", log_id)
    return log


def update_profit_sharing_log(db: Session, log_id: int, updates: Dict[str, Any], user: models.User) -> models.ProfitSharingLog:
    """Change the reinvested/payout split or the note; the share itself is fixed"""
    log = get_profit_sharing_log(db, log_id)
    for field in ("reinvested_to_other_business_amount", "cash_payout_amount"):
        if field in updates and updates[field] is None:
            raise ValidationFailure(f"{field} cannot be empty")
    reinvested = updates.get("reinvested_to_other_business_amount", log.reinvested_to_other_business_amount)
    payout = updates.get("cash_payout_amount", log.cash_payout_amount)
    _check_split(log.partner_share_amount, reinvested, payout)
    with atomic(db):
        for field, value in updates.items():
            setattr(log, field, value)
        log_activity(db, user, "updated_profit_sharing", "profit_sharing", log.id, updates)
    db.refresh(log)
    return log


def settle_profit_sharing_log(db: Session, log_id: int, user: models.User) -> models.ProfitSharingLog:
    log = get_profit_sharing_log(db, log_id)
    if log.is_settled:
        raise ValidationFailure("This profit share is already settled")
    with atomic(db):
        log.is_settled = True
        log_activity(db, user, "settled_profit_sharing", "profit_sharing", log.id, {
            "partner_share_amount": log.partner_share_amount
        })
    db.refresh(log)
    return log
