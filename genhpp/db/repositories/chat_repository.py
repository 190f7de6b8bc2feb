"""
Chat repository for anonymous 1:1 matchmaking.

A session moves pending -> active when a second user joins and
pending/active -> ended when a participant leaves. The join is a single
conditional UPDATE guarded by ``status = 'pending'``; if another caller got
there first the UPDATE matches no row and the caller tries the next
candidate.

Participant lists are JSON arrays, so membership is checked in Python to stay
portable between PostgreSQL and SQLite.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from genhpp.core.constants import ChatStatus
from genhpp.db.models import ChatMessage, ChatSession
from genhpp.db.repositories.base import BaseRepository


class ChatSessionRepository(BaseRepository[ChatSession]):
    """Repository for chat sessions and their messages."""

    def __init__(self, session: Session):
        super().__init__(ChatSession, session)

    def _by_status(self, *statuses: str) -> List[ChatSession]:
        return (
            self.session.query(ChatSession)
            .filter(ChatSession.status.in_(statuses))
            .order_by(ChatSession.created_at.asc(), ChatSession.id.asc())
            .all()
        )

    def get_open_session_for_user(self, user_id: int) -> Optional[ChatSession]:
        """Most recent pending or active session the user takes part in."""
        sessions = self._by_status(ChatStatus.PENDING.value, ChatStatus.ACTIVE.value)
        mine = [s for s in sessions if user_id in (s.participant_ids or [])]
        return mine[-1] if mine else None

    def find_pending_candidates(self, user_id: int) -> List[ChatSession]:
        """Pending sessions the user is not already in, oldest first."""
        return [
            s for s in self._by_status(ChatStatus.PENDING.value)
            if user_id not in (s.participant_ids or [])
        ]

    def try_join(self, chat_session: ChatSession, user_id: int) -> bool:
        """
        Add the user to a pending session and activate it.

        Returns:
            True if this caller activated the session, False if it was no
            longer pending
        """
        participants = list(chat_session.participant_ids or []) + [user_id]
        updated = (
            self.session.query(ChatSession)
            .filter(ChatSession.id == chat_session.id, ChatSession.status == ChatStatus.PENDING.value)
            .update(
                {"participant_ids": participants, "status": ChatStatus.ACTIVE.value},
                synchronize_session=False,
            )
        )
        self.session.flush()
        self.session.expire(chat_session)
        return updated == 1

    def create_pending(self, user_id: int) -> ChatSession:
        return self.create(participant_ids=[user_id], status=ChatStatus.PENDING.value)

    def end(self, chat_session: ChatSession) -> ChatSession:
        return self.update(chat_session.id, status=ChatStatus.ENDED.value)

    def add_message(self, chat_session_id: int, sender_id: int, **content: Any) -> ChatMessage:
        """
        Append a message to a session.

        Args:
            chat_session_id: Session ID
            sender_id: Sending user ID
            **content: text, image_url, calculation, reply_to
        """
        message = ChatMessage(session_id=chat_session_id, sender_id=sender_id, **content)
        self.session.add(message)
        self.session.flush()
        return message

    def get_message(self, chat_session_id: int, message_id: int) -> Optional[ChatMessage]:
        return (
            self.session.query(ChatMessage)
            .filter(ChatMessage.session_id == chat_session_id, ChatMessage.id == message_id)
            .first()
        )

    def list_messages(self, chat_session_id: int) -> List[ChatMessage]:
        return (
            self.session.query(ChatMessage)
            .filter(ChatMessage.session_id == chat_session_id)
            .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
            .all()
        )


def reply_snapshot(message: ChatMessage) -> Dict[str, Any]:
    """Quoted-message payload stored on a reply."""
    return {"message_id": message.id, "text": message.text, "sender_id": message.sender_id}
