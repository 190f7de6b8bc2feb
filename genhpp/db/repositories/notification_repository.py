"""
Notification repository for per-user inboxes.
"""

from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from genhpp.db.models import Notification
from genhpp.db.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification database operations."""

    def __init__(self, session: Session):
        super().__init__(Notification, session)

    def list_for_user(self, user_id: int, limit: int = 100, offset: int = 0) -> List[Notification]:
        """Inbox, newest first."""
        return self.get_all(user_id=user_id, limit=limit, offset=offset, newest_first=True)

    def unread_count(self, user_id: int) -> int:
        return (
            self.session.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .count()
        )

    def create_many(self, items: Iterable[Dict[str, Any]]) -> List[Notification]:
        """
        Insert several notifications in one flush.

        Args:
            items: Dicts with user_id, type, title, content
        """
        instances = [Notification(**item) for item in items]
        self.session.add_all(instances)
        self.session.flush()
        return instances

    def mark_all_read(self, user_id: int) -> int:
        """Mark every unread notification as read. Returns the number updated."""
        updated = (
            self.session.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .update({"is_read": True}, synchronize_session=False)
        )
        self.session.flush()
        return updated
