"""
FastAPI application for GenHPP.

Provides REST API endpoints for:
- HPP calculations (CRUD, sharing, CSV export)
- Pricing, loan and ads calculators
- Expenses and monthly reports
- Community feed, comments and content reports
- Anonymous 1:1 chat matchmaking
- Notifications and admin tools
- AI assistants
"""

import os
import logging
import time
import traceback
from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from genhpp import __version__
from genhpp.api.auth import ensure_site_available
from genhpp.db.connection import get_db_manager, init_db, get_db_session
from genhpp.api.routes import (
    admin,
    ai,
    calculations,
    calculators,
    chat,
    community,
    expenses,
    notifications,
    profile,
    reports,
)

logger = logging.getLogger("genhpp")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ensure tables on startup and release the pool on shutdown (skipped on Vercel)."""
    # Vercel deployments run against a pre-migrated database
    manage_db = not os.getenv("VERCEL")
    if manage_db:
        logger.info("GenHPP API starting, ensuring database tables")
        init_db()
    yield
    if manage_db:
        logger.info("GenHPP API stopping")
        get_db_manager().dispose()


# Create FastAPI application
app = FastAPI(
    title="GenHPP API",
    description="HPP calculator, pricing simulators, expense reports and community API for Indonesian micro-entrepreneurs",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS configuration for the web frontend
_default_origins = "http://localhost:3000,http://localhost:5173,http://localhost:9002"
_cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _default_origins).split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    logger.error(traceback.format_exc())
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "type": type(exc).__name__,
        },
    )


# Health check endpoint
@app.get("/health")
async def health_check() -> Dict[str, str]:
    """API health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "service": "genhpp-api",
    }


@app.get("/health/db")
def health_check_db(db: Session = Depends(get_db_session)):
    """Round-trip a trivial query and report how long it took."""
    started = time.perf_counter()
    report: Dict[str, Any] = {"database": db.get_bind().dialect.name}
    try:
        db.execute(text("SELECT 1"))
        report["status"] = "healthy"
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        report["status"] = "unhealthy"
        report["error"] = str(e)
    report["latency_ms"] = round((time.perf_counter() - started) * 1000, 2)
    return report


# User-facing routers answer 503 to non-admins during maintenance
_gated = [Depends(ensure_site_available)]

app.include_router(calculations.router, prefix="/api/calculations", tags=["Calculations"], dependencies=_gated)
app.include_router(community.router, prefix="/api/community", tags=["Community"], dependencies=_gated)
app.include_router(expenses.router, prefix="/api/expenses", tags=["Expenses"], dependencies=_gated)
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"], dependencies=_gated)
app.include_router(chat.router, prefix="/api/chat", tags=["Chat"], dependencies=_gated)
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"], dependencies=_gated)
app.include_router(ai.router, prefix="/api/ai", tags=["AI"], dependencies=_gated)
app.include_router(profile.router, prefix="/api/profile", tags=["Profile"], dependencies=_gated)
app.include_router(calculators.router, prefix="/api/calculators", tags=["Calculators"])
app.include_router(notifications.admin_router, prefix="/api", tags=["Notifications"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(admin.public_router, prefix="/api", tags=["Site Status"])


# Root endpoint
@app.get("/")
async def root() -> Dict[str, Any]:
    """API root endpoint with service information."""
    return {
        "service": "GenHPP API",
        "version": __version__,
        "docs": "/api/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "genhpp.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
