"""
Database repository layer.

Provides data access patterns using the Repository Pattern.
"""

from genhpp.db.repositories.base import BaseRepository
from genhpp.db.repositories.user_repository import UserRepository
from genhpp.db.repositories.calculation_repository import CalculationRepository, PublicCalculationRepository
from genhpp.db.repositories.expense_repository import ExpenseRepository
from genhpp.db.repositories.comment_repository import CommentRepository, ContentReportRepository
from genhpp.db.repositories.notification_repository import NotificationRepository
from genhpp.db.repositories.chat_repository import ChatSessionRepository
from genhpp.db.repositories.site_status_repository import SiteStatusRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CalculationRepository",
    "PublicCalculationRepository",
    "ExpenseRepository",
    "CommentRepository",
    "ContentReportRepository",
    "NotificationRepository",
    "ChatSessionRepository",
    "SiteStatusRepository",
]
