# ARIVAH/backend/arivah/database.py

from contextlib import contextmanager
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from arivah.config import DATABASE_URL
from arivah.services.errors import StoreFailure
import logging

logger = logging.getLogger(__name__)

# SQLite does not accept the pool sizing options
if DATABASE_URL.startswith("sqlite"):
    engine_options = {"connect_args": {"check_same_thread": False}}
else:
    engine_options = {
        "pool_size": 5,  # Permanent connections
        "max_overflow": 10,  # Extra temporary connections
        "pool_pre_ping": True,  # Check the connection is alive before use
    }

try:
    engine = create_engine(DATABASE_URL, echo=False, **engine_options)
    logger.info("✅ Database engine created")
except Exception as e:
    logger.error(f"❌ Could not create the database engine: {e}")
    raise

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Base class for the models (tables)
Base = declarative_base()

# Dependency for FastAPI
def get_db():
    """
    FastAPI dependency yielding a database session.
    Use in routes with: db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def atomic(db):
    """
    Transactional boundary for multi-row writes.

    Everything added to ``db`` inside the block is committed together; on any
    error the session is rolled back and the error re-raised. Store errors are
    surfaced as StoreFailure.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Write rolled back: {e}")
        raise StoreFailure(str(e)) from e
    except Exception:
        db.rollback()
        raise

@contextmanager
def store_read():
    """
    Read boundary: store errors during queries surface as StoreFailure.
    Also usable as a decorator (``@store_read()``).
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"❌ Read failed: {e}")
        raise StoreFailure(str(e)) from e

def create_tables():
    """Create every table defined by the models"""
    # Registers the models on Base.metadata
    from arivah.models import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("✅ Tables created/checked")

def drop_tables():
    """Drop every table (USE WITH CARE)"""
    Base.metadata.drop_all(bind=engine)
    logger.warning("⚠️ All tables dropped")

def check_connection():
    """Check that the database answers"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"❌ Connection error: {e}")
        return False
