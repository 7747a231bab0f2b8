"""
PayrollHub - FastAPI Application Entry Point

This is the main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import init_db, close_db
from app.routers import (
    activity_logs,
    auth,
    bonuses,
    chart_of_accounts,
    deductions,
    employees,
    geography,
)
from app.routers.master_data import master_routers
from app.utils.error_handling import setup_exception_handlers

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.app_env}")

    # Initialize database (dev only - use migrations in production)
    if settings.is_development:
        await init_db()
        logger.info("Database tables initialized")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await close_db()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="HR and payroll back office: master data, employees, bonuses, deductions and chart of accounts",
    version="0.1.0",
    docs_url="/api/docs" if settings.is_development else None,
    redoc_url="/api/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)


# ===========================================
# API ROUTES
# ===========================================

@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
        "environment": settings.app_env,
        "api_docs": "/api/docs" if settings.is_development else "disabled",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


prefix = settings.api_prefix

# Authentication
app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Authentication"])

# Lookup lists and payroll policies
for resource, resource_router in master_routers:
    app.include_router(resource_router, prefix=f"{prefix}/{resource.slug}", tags=[resource.tag])

# Geography (countries, provinces, cities)
app.include_router(geography.router, prefix=prefix, tags=["Geography"])

# Employees and transfers
app.include_router(employees.router, prefix=f"{prefix}/employees", tags=["Employees"])

# Payroll
app.include_router(bonuses.router, prefix=f"{prefix}/bonuses", tags=["Bonuses"])
app.include_router(deductions.router, prefix=f"{prefix}/deductions", tags=["Deductions"])

# Accounting
app.include_router(chart_of_accounts.router, prefix=f"{prefix}/chart-of-accounts", tags=["Chart of Accounts"])

# Activity log
app.include_router(activity_logs.router, prefix=f"{prefix}/activity-logs", tags=["Activity Logs"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
