"""
API route modules.

Contains FastAPI routers for different resource types.
"""

from genhpp.api.routes import admin, ai, calculations, calculators, chat, community, expenses, notifications, profile, reports

__all__ = [
    "admin",
    "ai",
    "calculations",
    "calculators",
    "chat",
    "community",
    "expenses",
    "notifications",
    "profile",
    "reports",
]
