# ARIVAH/backend/arivah/services/transfers_service.py : inter-business transfers

from sqlalchemy.orm import Session
from typing import Dict, Any
from arivah.models import models
from arivah.constants import TRANSFER_CATEGORY
from arivah.database import atomic
from arivah.services import records
from arivah.services.activity import log_activity
from arivah.services.errors import ValidationFailure
import logging

logger = logging.getLogger(__name__)


def create_transfer(db: Session, data: Dict[str, Any], user: models.User) -> models.InterBusinessTransfer:
    """
    Move money from one business to another.

    The transfer row, the transfer_out on the source and the transfer_in on
    the destination (same date and amount) are committed together.
    """
    if data["from_business_id"] == data["to_business_id"]:
        raise ValidationFailure("A transfer needs two different businesses")
    if data["amount"] < 0:
        raise ValidationFailure("Transfer amount cannot be negative")

    source = records.get_business(db, data["from_business_id"])
    destination = records.get_business(db, data["to_business_id"])

    transfer = models.InterBusinessTransfer(**data, created_by=user.id)
    with atomic(db):
        db.add(transfer)
        db.flush()

        outgoing = models.Transaction(
            business_id=source.id,
            date=transfer.date,
            type="transfer_out",
            category=TRANSFER_CATEGORY,
            amount=transfer.amount,
            description=f"Transfer to {destination.name}: {transfer.purpose}",
            created_by=user.id,
            transfer_id=transfer.id
        )
        incoming = models.Transaction(
            business_id=destination.id,
            date=transfer.date,
            type="transfer_in",
            category=TRANSFER_CATEGORY,
            amount=transfer.amount,
            description=f"Transfer from {source.name}: {transfer.purpose}",
            created_by=user.id,
            transfer_id=transfer.id
        )
        db.add_all([outgoing, incoming])

        log_activity(db, user, "created_transfer", "transfer", transfer.id, {
            "amount": transfer.amount,
            "from_business": source.name,
            "to_business": destination.name,
            "purpose": transfer.purpose,
            "date": transfer.date
        })

    logger.info(f"🔁 Transfer {transfer.id}: {transfer.amount:.2f} from {source.name} to {destination.name}")
    db.refresh(transfer)
    return transfer


def delete_transfer(db: Session, transfer_id: int, user: models.User) -> None:
    """Remove a transfer together with both of its transactions"""
    transfer = records.get_transfer(db, transfer_id)
    with atomic(db):
        log_activity(db, user, "deleted_transfer", "transfer", transfer.id, {
            "amount": transfer.amount,
            "from_business_id": transfer.from_business_id,
            "to_business_id": transfer.to_business_id,
            "date": transfer.date
        })
        # legs go with it (delete-orphan cascade)
        db.delete(transfer)
    logger.info(f"🗑️ Transfer {transfer_id} deleted with its transactions")
