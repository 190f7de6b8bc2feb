"""
Database layer for GenHPP.

Provides the PostgreSQL schema, ORM models, and connection management.
"""

from .connection import get_db_manager, get_db_session, init_db
from .models import (
    Base,
    User,
    Calculation,
    PublicCalculation,
    Expense,
    Comment,
    ContentReport,
    Notification,
    ChatSession,
    ChatMessage,
    SiteStatus,
)

__all__ = [
    # Connection utilities
    "get_db_manager",
    "get_db_session",
    "init_db",
    # Models
    "Base",
    "User",
    "Calculation",
    "PublicCalculation",
    "Expense",
    "Comment",
    "ContentReport",
    "Notification",
    "ChatSession",
    "ChatMessage",
    "SiteStatus",
]
