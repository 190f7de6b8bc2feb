"""
Anonymous chat API endpoints.

Matchmaking pairs two users in a 1:1 session:
- find: join the oldest pending session someone else is waiting in
- wait: open a new pending session when nobody is waiting
- end: either participant closes the session

Clients poll the message list; there is no push channel.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from genhpp.api.schemas import (
    ChatMessageCreate,
    ChatMessageResponse,
    ChatSessionDetail,
    ChatSessionResponse,
)
from genhpp.api.auth import get_current_user
from genhpp.core.constants import ChatStatus
from genhpp.db.connection import get_db_session
from genhpp.db.models import ChatSession, User
from genhpp.db.repositories import ChatSessionRepository
from genhpp.db.repositories.chat_repository import reply_snapshot


logger = logging.getLogger(__name__)
router = APIRouter()


def _get_participant_session(repo: ChatSessionRepository, session_id: int, user: User) -> ChatSession:
    chat_session = repo.get_by_id(session_id)
    if not chat_session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Chat session {session_id} not found",
        )
    if user.id not in (chat_session.participant_ids or []):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a participant of this chat session",
        )
    return chat_session


def _ensure_not_in_session(repo: ChatSessionRepository, user: User) -> None:
    current = repo.get_open_session_for_user(user.id)
    if current:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Already in chat session {current.id}",
        )


@router.get("/session", response_model=ChatSessionDetail)
def get_current_session(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """The caller's pending or active session with its messages."""
    repo = ChatSessionRepository(db)
    chat_session = repo.get_open_session_for_user(current_user.id)
    if not chat_session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No open chat session",
        )
    detail = ChatSessionResponse.model_validate(chat_session).model_dump()
    detail["messages"] = repo.list_messages(chat_session.id)
    return detail


@router.post("/find", response_model=ChatSessionResponse)
def find_partner(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """
    Join a waiting user's session.

    Candidates are tried oldest first. A candidate taken by someone else
    between the read and the conditional update is skipped.
    """
    repo = ChatSessionRepository(db)
    _ensure_not_in_session(repo, current_user)

    for candidate in repo.find_pending_candidates(current_user.id):
        if repo.try_join(candidate, current_user.id):
            db.commit()
            db.refresh(candidate)
            logger.info(f"User {current_user.id} joined chat session {candidate.id}")
            return candidate
        logger.info(f"Chat session {candidate.id} was taken, trying next candidate")

    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="No waiting partner found",
    )


@router.post("/wait", response_model=ChatSessionResponse, status_code=status.HTTP_201_CREATED)
def wait_for_partner(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Open a pending session containing only the caller."""
    repo = ChatSessionRepository(db)
    _ensure_not_in_session(repo, current_user)

    try:
        chat_session = repo.create_pending(current_user.id)
        db.commit()
        db.refresh(chat_session)
        return chat_session
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create chat session: {str(e)}",
        )


@router.post("/{session_id}/end", response_model=ChatSessionResponse)
def end_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = ChatSessionRepository(db)
    chat_session = _get_participant_session(repo, session_id, current_user)

    if chat_session.status == ChatStatus.ENDED.value:
        return chat_session

    try:
        ended = repo.end(chat_session)
        db.commit()
        db.refresh(ended)
        return ended
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to end chat session: {str(e)}",
        )


@router.get("/{session_id}/messages", response_model=List[ChatMessageResponse])
def list_messages(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = ChatSessionRepository(db)
    _get_participant_session(repo, session_id, current_user)
    return repo.list_messages(session_id)


@router.post(
    "/{session_id}/messages",
    response_model=ChatMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def send_message(
    session_id: int,
    message: ChatMessageCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = ChatSessionRepository(db)
    chat_session = _get_participant_session(repo, session_id, current_user)

    if chat_session.status != ChatStatus.ACTIVE.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Chat session is {chat_session.status}, not active",
        )

    reply_to = None
    if message.reply_to_id is not None:
        quoted = repo.get_message(session_id, message.reply_to_id)
        if not quoted:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Message {message.reply_to_id} not found in this session",
            )
        reply_to = reply_snapshot(quoted)

    try:
        new_message = repo.add_message(
            session_id,
            current_user.id,
            text=message.text,
            image_url=message.image_url,
            calculation=message.calculation,
            reply_to=reply_to,
        )
        db.commit()
        db.refresh(new_message)
        return new_message
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to send message: {str(e)}",
        )
