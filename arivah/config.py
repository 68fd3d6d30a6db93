# ARIVAH/backend/arivah/config.py

import os
from dotenv import load_dotenv
from pathlib import Path

# Absolute path of the folder holding this file (arivah/)
BASE_DIR = Path(__file__).parent.absolute()
env_path = BASE_DIR / '.env'

# Load variables from the .env file
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
    print(f"✅ .env loaded from: {env_path}")
else:
    print(f"ℹ️  No .env file at {env_path}, using environment only")

# ============================================
# ENVIRONMENT
# ============================================
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# ============================================
# DATABASE
# ============================================
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./arivah.db")
if ENVIRONMENT == "production" and DATABASE_URL.startswith("sqlite"):
    raise ValueError("DATABASE_URL must point to a real database in production")

# ============================================
# CORS (Frontend)
# ============================================
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")

# ============================================
# BOOKKEEPING
# ============================================
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "INR")

# Businesses shown side by side on the consolidated dashboard, in order.
# Transfers are counted from each business to the ones listed after it.
DASHBOARD_BUSINESSES = os.getenv("DASHBOARD_BUSINESSES", "Arivah Web Dev,Arivah Jewels")

# Absolute tolerance when comparing settlement totals
SETTLEMENT_TOLERANCE = float(os.getenv("SETTLEMENT_TOLERANCE", "0.01"))

ACTIVITY_LOG_LIMIT = int(os.getenv("ACTIVITY_LOG_LIMIT", "100"))

# ============================================
# LOGGING
# ============================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ============================================
# HELPERS
# ============================================
def get_dashboard_business_names():
    """Names of the businesses on the consolidated dashboard"""
    return [name.strip() for name in DASHBOARD_BUSINESSES.split(",") if name.strip()]

def is_production():
    """True when running in production"""
    return ENVIRONMENT == "production"

def is_development():
    """True when running in development"""
    return ENVIRONMENT == "development"
