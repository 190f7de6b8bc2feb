"""
User repository for database operations.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from genhpp.db.models import User
from genhpp.db.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    def __init__(self, session: Session):
        super().__init__(User, session)

    def get_by_auth_id(self, auth_id: str) -> Optional[User]:
        return self.session.query(User).filter(User.auth_id == auth_id).first()

    def get_or_create_by_auth_id(
        self,
        auth_id: str,
        email: Optional[str] = None,
        name: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> User:
        """
        Look up a user by identity-provider id, creating the row on first login.

        Args:
            auth_id: The JWT ``sub`` claim
            email: Email claim, stored on creation
            name: Display name, falls back to the email's local part
            photo_url: Avatar URL from the identity provider

        Returns:
            Existing or newly created User
        """
        user = self.get_by_auth_id(auth_id)
        if user:
            return user

        display_name = name or (email.split("@")[0] if email else None) or "Pengguna"
        user = self._insert_user(auth_id, email, display_name, photo_url)
        if user is not None:
            return user

        # A concurrent first request for the same sub won the insert
        user = self.get_by_auth_id(auth_id)
        if user is not None:
            return user

        # Email already belongs to another account; keep the accounts apart
        logger.warning("Email for user %s is registered to another account, stored without it", auth_id)
        return self.create(auth_id=auth_id, email=None, name=display_name, photo_url=photo_url)

    def _insert_user(
        self, auth_id: str, email: Optional[str], name: str, photo_url: Optional[str]
    ) -> Optional[User]:
        """Insert inside a savepoint. None if a unique constraint rejected it."""
        try:
            with self.session.begin_nested():
                return self.create(auth_id=auth_id, email=email, name=name, photo_url=photo_url)
        except IntegrityError:
            return None

    def list_users(self, limit: int = 100, offset: int = 0) -> List[User]:
        return (
            self.session.query(User)
            .order_by(User.created_at.desc(), User.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )

    def set_admin(self, user_id: int, is_admin: bool) -> Optional[User]:
        return self.update(user_id, is_admin=is_admin)
