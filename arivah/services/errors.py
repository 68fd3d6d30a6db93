# ARIVAH/backend/arivah/services/errors.py

class NotFoundError(Exception):
    """A business, investment or other record does not exist"""

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} {entity_id} not found"
        super().__init__(message)


class ValidationFailure(ValueError):
    """Input rejected before anything is written"""


class StoreFailure(Exception):
    """The underlying database read or write failed"""


class UnknownTransactionTypeError(RuntimeError):
    """A transaction carries a type the classification rules do not know"""

    def __init__(self, transaction_type):
        self.transaction_type = transaction_type
        super().__init__(f"Unknown transaction type: {transaction_type!r}")
