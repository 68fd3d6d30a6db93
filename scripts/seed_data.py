# ARIVAH/backend/scripts/seed_data.py : demo data generator

#!/usr/bin/env python
"""Generate realistic demo data for the two Arivah businesses"""

import random
import sys
import os
from datetime import date, timedelta
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from arivah.database import SessionLocal, create_tables
from arivah.models import models
from arivah.constants import BUSINESS_TYPES, PAYMENT_METHODS
from arivah.services.transfers_service import create_transfer

REVENUE_CATEGORIES = {
    "service": ["Website build", "Maintenance", "Hosting"],
    "ecommerce": ["Online order", "Wholesale", "Custom piece"]
}
EXPENSE_CATEGORIES = ["Rent", "Salaries", "Supplies", "Marketing", "Software"]
PERSONAL_CATEGORIES = ["Travel", "Meals", "Office", "Fuel"]

def generate_test_data():
    """Builds six months of demo data"""
    create_tables()
    db = SessionLocal()

    demo_user = models.User(name="Demo", email="demo@arivah.in")
    db.add(demo_user)
    db.commit()
    db.refresh(demo_user)

    web_dev = models.Business(name="Arivah Web Dev", type=BUSINESS_TYPES[0], currency="INR")
    jewels = models.Business(name="Arivah Jewels", type=BUSINESS_TYPES[1], currency="INR")
    db.add_all([web_dev, jewels])
    db.commit()

    # Two partners, 60/40 in both businesses
    partners = [
        models.Partner(name="Partner A", email="a@arivah.in", equity_percentage=60),
        models.Partner(name="Partner B", email="b@arivah.in", equity_percentage=40)
    ]
    db.add_all(partners)
    db.commit()
    for business in (web_dev, jewels):
        for partner in partners:
            db.add(models.BusinessPartner(
                business_id=business.id,
                partner_id=partner.id,
                equity_percentage=partner.equity_percentage
            ))
    db.commit()

    methods = list(PAYMENT_METHODS)
    today = date.today()

    for business in (web_dev, jewels):
        for days_ago in range(180):
            day = today - timedelta(days=days_ago)

            # 0-2 sales a day
            for _ in range(random.randint(0, 2)):
                db.add(models.Transaction(
                    business_id=business.id,
                    date=day,
                    type="revenue",
                    category=random.choice(REVENUE_CATEGORIES[business.type]),
                    amount=random.randint(2000, 60000),
                    payment_method=random.choice(methods),
                    created_by=demo_user.id
                ))

            # Expenses 2-3 times a week
            if random.random() < 0.35:
                db.add(models.Transaction(
                    business_id=business.id,
                    date=day,
                    type="expense",
                    category=random.choice(EXPENSE_CATEGORIES),
                    amount=random.randint(1000, 25000),
                    payment_method=random.choice(methods),
                    created_by=demo_user.id
                ))

    for days_ago in range(0, 180, 4):
        db.add(models.PersonalExpense(
            user_id=demo_user.id,
            business_id=random.choice([web_dev.id, jewels.id, None]),
            date=today - timedelta(days=days_ago),
            category=random.choice(PERSONAL_CATEGORIES),
            amount=random.randint(200, 5000),
            payment_method=random.choice(methods),
            is_reimbursable=random.random() < 0.5
        ))
    db.commit()

    # Monthly transfer from Web Dev into Jewels stock
    for months_ago in range(6):
        create_transfer(db, {
            "from_business_id": web_dev.id,
            "to_business_id": jewels.id,
            "amount": random.randint(10000, 40000),
            "date": today - timedelta(days=30 * months_ago),
            "purpose": "Inventory funding"
        }, demo_user)

    demo_user_id = demo_user.id
    db.close()
    print("✅ Demo data generated!")
    print(f"👤 Demo user: demo@arivah.in (send X-User-Id: {demo_user_id})")

if __name__ == "__main__":
    generate_test_data()
