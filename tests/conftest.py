# ARIVAH/backend/tests/conftest.py : test configuration

import sys
from pathlib import Path

# Add the project root to the PYTHONPATH
BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR))

import pytest
from datetime import date
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from arivah.main import app
from arivah.database import Base, get_db
from arivah.models import models

@pytest.fixture
def db_engine():
    """Fresh in-memory database for each test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    yield session
    session.close()

@pytest.fixture
def client(db_session):
    """Test client bound to the test database"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def user(db_session):
    user = models.User(name="Asha", email="asha@arivah.in")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user

@pytest.fixture
def headers(user):
    return {"X-User-Id": str(user.id)}

@pytest.fixture
def make_business(db_session):
    def _make(name, type="service"):
        business = models.Business(name=name, type=type)
        db_session.add(business)
        db_session.commit()
        db_session.refresh(business)
        return business
    return _make

@pytest.fixture
def add_transaction(db_session, user):
    def _add(business, type, amount, day, category="General"):
        transaction = models.Transaction(
            business_id=business.id,
            type=type,
            amount=amount,
            date=day,
            category=category,
            created_by=user.id
        )
        db_session.add(transaction)
        db_session.commit()
        return transaction
    return _add

@pytest.fixture
def make_partner(db_session):
    def _make(name, equity=0):
        partner = models.Partner(name=name, equity_percentage=equity)
        db_session.add(partner)
        db_session.commit()
        db_session.refresh(partner)
        return partner
    return _make

@pytest.fixture
def jan_2024():
    return date(2024, 1, 1), date(2024, 1, 31)
