# ARIVAH/backend/arivah/main.py

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from arivah.routes import (
    users,
    businesses,
    transactions,
    transfers,
    investments,
    personal_expenses,
    partners,
    profit_sharing,
    tasks,
    dashboard,
    activity
)
from arivah.database import check_connection, create_tables
from arivah.config import ALLOWED_ORIGINS, ENVIRONMENT, LOG_LEVEL, DEFAULT_CURRENCY
from arivah.services.errors import StoreFailure, UnknownTransactionTypeError
import logging
import datetime
import sys
import fastapi
import sqlalchemy

# Logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- STARTUP ---
    logger.info("🚀 Starting the Arivah API...")

    if check_connection():
        logger.info("✅ Database connection established")
        # Missing tables only; schema changes need a migration
        create_tables()
    else:
        logger.error("❌ Could not connect to the database")

    yield

    # --- SHUTDOWN ---
    logger.info("👋 Arivah API stopped")

app = FastAPI(
    title="Arivah API",
    description="Bookkeeping for the Arivah businesses: transactions, transfers, partners and settlements",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "users", "description": "Users and their activity stats"},
        {"name": "businesses", "description": "Businesses, metrics and partner equity"},
        {"name": "transactions", "description": "Business transactions"},
        {"name": "transfers", "description": "Inter-business transfers (two linked transactions)"},
        {"name": "investments", "description": "Investments and their settlement between partners"},
        {"name": "personal-expenses", "description": "Expenses paid personally, with reimbursement"},
        {"name": "partners", "description": "Partners and profit shares"},
        {"name": "profit-sharing", "description": "Recorded profit distributions"},
        {"name": "tasks", "description": "Team tasks"},
        {"name": "dashboard", "description": "Consolidated view across businesses 📊"},
        {"name": "activity", "description": "Activity log"}
    ]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure):
    logger.error(f"❌ Store failure on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"success": False, "detail": str(exc)})

@app.exception_handler(UnknownTransactionTypeError)
async def unknown_type_handler(request: Request, exc: UnknownTransactionTypeError):
    logger.error(f"❌ {exc} on {request.url.path}")
    return JSONResponse(status_code=500, content={"success": False, "detail": str(exc)})

app.include_router(users.router)
app.include_router(businesses.router)
app.include_router(transactions.router)
app.include_router(transfers.router)
app.include_router(investments.router)
app.include_router(personal_expenses.router)
app.include_router(partners.router)
app.include_router(profit_sharing.router)
app.include_router(tasks.router)
app.include_router(dashboard.router)
app.include_router(activity.router)

@app.get("/")
def root():
    """
    API root - general information
    """
    return {
        "success": True,
        "message": "Arivah backend running 🚀",
        "version": app.version,
        "environment": ENVIRONMENT,
        "currency": DEFAULT_CURRENCY,
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "endpoints": {
            "users": "/users",
            "businesses": "/businesses",
            "transactions": "/transactions",
            "transfers": "/transfers",
            "investments": "/investments",
            "personal_expenses": "/personal-expenses",
            "partners": "/partners",
            "profit_sharing": "/profit-sharing",
            "tasks": "/tasks",
            "dashboard": "/dashboard",
            "activity": "/activity",
            "docs": "/docs"
        },
        "health_check": "/health"
    }

@app.get("/health")
def health_check():
    """
    Health endpoint for monitoring
    """
    db_status = check_connection()

    return {
        "status": "healthy" if db_status else "unhealthy",
        "database": "connected" if db_status else "disconnected",
        "version": app.version,
        "timestamp": datetime.datetime.now().isoformat()
    }

@app.get("/info")
def info():
    return {
        "name": app.title,
        "description": app.description,
        "version": app.version,
        "python_version": sys.version,
        "fastapi_version": fastapi.__version__,
        "sqlalchemy_version": sqlalchemy.__version__,
        "environment": ENVIRONMENT
    }
