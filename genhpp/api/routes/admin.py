"""
Admin API endpoints.

User role management, content report review and the global site status
flags. Every endpoint requires an admin caller except the public
``GET /api/site-status`` served by ``public_router``.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from genhpp.api.schemas import (
    AdminRoleUpdate,
    ContentReportResponse,
    ContentReportUpdate,
    SiteStatusResponse,
    SiteStatusUpdate,
    UserResponse,
)
from genhpp.api.auth import require_admin
from genhpp.core.constants import ReportStatus
from genhpp.db.connection import get_db_session
from genhpp.db.models import User
from genhpp.db.repositories import ContentReportRepository, SiteStatusRepository, UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])
public_router = APIRouter()


@router.get("/users", response_model=List[UserResponse])
def list_users(
    limit: int = 100,
    offset: int = 0,
    db: Session = Depends(get_db_session),
):
    return UserRepository(db).list_users(limit=limit, offset=offset)


@router.put("/users/{user_id}/admin", response_model=UserResponse)
def set_admin_role(
    user_id: int,
    role: AdminRoleUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db_session),
):
    """Grant or revoke admin rights. Admins cannot revoke their own."""
    repo = UserRepository(db)
    user = repo.get_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} not found",
        )
    if user.id == admin.id and not role.is_admin:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot revoke their own admin rights",
        )

    try:
        updated = repo.set_admin(user_id, role.is_admin)
        db.commit()
        db.refresh(updated)
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update user: {str(e)}",
        )

    logger.info(f"Admin {admin.id} set is_admin={role.is_admin} for user {user_id}")
    return updated


@router.get("/reports", response_model=List[ContentReportResponse])
def list_reports(
    report_status: Optional[ReportStatus] = None,
    limit: int = 100,
    offset: int = 0,
    db: Session = Depends(get_db_session),
):
    status_value = report_status.value if report_status else None
    return ContentReportRepository(db).list_reports(status=status_value, limit=limit, offset=offset)


@router.put("/reports/{report_id}", response_model=ContentReportResponse)
def update_report(
    report_id: int,
    report_update: ContentReportUpdate,
    db: Session = Depends(get_db_session),
):
    repo = ContentReportRepository(db)
    if not repo.get_by_id(report_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Report {report_id} not found",
        )

    try:
        updated = repo.update(report_id, status=report_update.status)
        db.commit()
        db.refresh(updated)
        return updated
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update report: {str(e)}",
        )


@router.get("/site-status", response_model=SiteStatusResponse)
def get_admin_site_status(db: Session = Depends(get_db_session)):
    return SiteStatusRepository(db).get_status()


@router.put("/site-status", response_model=SiteStatusResponse)
def update_site_status(
    status_update: SiteStatusUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db_session),
):
    flags = {k: v for k, v in status_update.model_dump().items() if v is not None}

    try:
        updated = SiteStatusRepository(db).set_status(**flags)
        db.commit()
        db.refresh(updated)
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update site status: {str(e)}",
        )

    logger.info(f"Admin {admin.id} updated site status: {flags}")
    return updated


@public_router.get("/site-status", response_model=SiteStatusResponse)
def get_site_status(db: Session = Depends(get_db_session)):
    """Maintenance flags, readable without authentication."""
    return SiteStatusRepository(db).get_status()
