# ARIVAH/backend/arivah/constants.py

# Transaction types
TRANSACTION_TYPES = [
    "revenue", "expense", "transfer_out", "transfer_in",
    "partner_payout", "capital_injection", "tax", "other"
]

BUSINESS_TYPES = ["service", "ecommerce"]

PAYMENT_METHODS = {
    "cash": "Cash",
    "upi": "UPI",
    "card": "Card",
    "bank_transfer": "Bank transfer"
}

TRANSFER_CATEGORY = "Inter-business Transfer"

# Activity log vocabulary
ACTIVITY_ACTIONS = [
    "created_transaction", "updated_transaction", "deleted_transaction",
    "created_transfer", "deleted_transfer",
    "created_investment", "updated_investment", "deleted_investment", "settled_investment",
    "created_personal_expense", "updated_personal_expense", "deleted_personal_expense",
    "reimbursed_expense",
    "created_task", "updated_task", "deleted_task", "completed_task", "cancelled_task",
    "created_profit_sharing", "updated_profit_sharing", "settled_profit_sharing",
    "created_partner", "updated_partner", "updated_business_partner",
    "created_business", "updated_business"
]

ENTITY_TYPES = [
    "transaction", "business", "task", "transfer", "partner", "profit_sharing",
    "user", "investment", "investment_settlement", "personal_expense"
]

# Limits
MONTHLY_TREND_MONTHS = 6
MONTHLY_BREAKDOWN_MONTHS = 12
TOP_EXPENSE_CATEGORIES = 10
RECENT_ACTIVITY_PER_USER = 10
