"""
Notification API endpoints.

Two routers:
- ``router``: the caller's inbox (list, mark read)
- ``admin_router``: ``POST /api/send-admin-notification`` for admins to push
  one or many notifications into user inboxes
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from genhpp.api.schemas import (
    AdminNotificationItem,
    MessageResponse,
    NotificationListResponse,
    NotificationResponse,
)
from genhpp.api.auth import get_current_user, require_admin
from genhpp.db.connection import get_db_session
from genhpp.db.models import User
from genhpp.db.repositories import NotificationRepository, UserRepository

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No notification data provided."
INVALID_ITEM_MESSAGE = "Invalid notification object. `userId`, `title`, and `content` are required."
SENT_MESSAGE = "Notification(s) sent successfully."

router = APIRouter()
admin_router = APIRouter()


def _parse_notifications(payload: Any) -> List[AdminNotificationItem]:
    """Accept a single notification object or a list of them."""
    items = payload if isinstance(payload, list) else [payload]
    if payload is None or not items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NO_DATA_MESSAGE)

    parsed = []
    for item in items:
        if not isinstance(item, dict):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_ITEM_MESSAGE)
        try:
            parsed.append(AdminNotificationItem.model_validate(item))
        except ValidationError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_ITEM_MESSAGE)
    return parsed


@admin_router.post("/send-admin-notification", response_model=MessageResponse)
def send_admin_notification(
    payload: Any = Body(default=None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db_session),
):
    """
    Deliver admin-composed notifications.

    Body is one ``{userId, title, content, type?}`` object or a list of them.
    All are inserted in one transaction; nothing is sent if any item is invalid.
    """
    items = _parse_notifications(payload)

    users = UserRepository(db)
    for user_id in {item.user_id for item in items}:
        if not users.exists(id=user_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"User {user_id} not found",
            )

    try:
        NotificationRepository(db).create_many(
            {"user_id": item.user_id, "type": item.type, "title": item.title, "content": item.content}
            for item in items
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Admin notification insert failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to send notifications: {str(e)}",
        )

    logger.info(f"Admin {admin.id} sent {len(items)} notification(s)")
    return {"message": SENT_MESSAGE}


@router.get("/", response_model=NotificationListResponse)
def list_notifications(
    limit: int = 100,
    offset: int = 0,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Inbox, newest first, with the number of unread notifications."""
    repo = NotificationRepository(db)
    return {
        "unread_count": repo.unread_count(current_user.id),
        "notifications": repo.list_for_user(current_user.id, limit=limit, offset=offset),
    }


@router.post("/read-all", response_model=MessageResponse)
def mark_all_read(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    try:
        updated = NotificationRepository(db).mark_all_read(current_user.id)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update notifications: {str(e)}",
        )
    return {"message": f"{updated} notification(s) marked as read."}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = NotificationRepository(db)
    notification = repo.get_by_id(notification_id)

    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification {notification_id} not found",
        )
    if notification.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to modify this notification",
        )

    try:
        updated = repo.update(notification_id, is_read=True)
        db.commit()
        db.refresh(updated)
        return updated
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update notification: {str(e)}",
        )
