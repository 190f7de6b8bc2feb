"""
Community feed API endpoints.

Shared calculations, threaded comments and content reports.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from genhpp.api.schemas import (
    CommentCreate,
    CommentNode,
    CommentResponse,
    ContentReportCreate,
    ContentReportResponse,
    PublicCalculationDetail,
    PublicCalculationResponse,
)
from genhpp.api.auth import get_current_user
from genhpp.core.comments import build_comment_tree
from genhpp.core.constants import DEFAULT_COMMENT_USER_NAME, ReportStatus
from genhpp.core.hpp import per_product_breakdown
from genhpp.db.connection import get_db_session
from genhpp.db.models import PublicCalculation, User
from genhpp.db.repositories import (
    CalculationRepository,
    CommentRepository,
    ContentReportRepository,
    PublicCalculationRepository,
)


router = APIRouter()


def _get_public(db: Session, public_id: int) -> PublicCalculation:
    public_calculation = PublicCalculationRepository(db).get_by_id(public_id)
    if not public_calculation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Public calculation {public_id} not found",
        )
    return public_calculation


@router.get("/calculations", response_model=List[PublicCalculationResponse])
def list_public_calculations(
    limit: int = 50,
    offset: int = 0,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Community feed, newest first."""
    return PublicCalculationRepository(db).feed(limit=limit, offset=offset)


@router.get("/calculations/{public_id}", response_model=PublicCalculationDetail)
def get_public_calculation(
    public_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    public_calculation = _get_public(db, public_id)
    detail = PublicCalculationResponse.model_validate(public_calculation).model_dump()
    detail["breakdown"] = per_product_breakdown(
        public_calculation.materials,
        public_calculation.labor_cost,
        public_calculation.overhead,
        public_calculation.packaging,
        public_calculation.product_quantity,
    )
    detail["comment_count"] = len(public_calculation.comments)
    return detail


@router.delete("/calculations/{public_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_public_calculation(
    public_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Remove a post from the feed. Allowed for its owner and for admins."""
    public_calculation = _get_public(db, public_id)
    if public_calculation.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this post",
        )

    try:
        source = CalculationRepository(db).get_by_id(public_calculation.calculation_id)
        if source:
            source.is_public = False
        PublicCalculationRepository(db).delete(public_id)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete public calculation: {str(e)}",
        )


@router.get("/calculations/{public_id}/comments", response_model=List[CommentNode])
def list_comments(
    public_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Comments nested by parent, roots and replies in posting order."""
    _get_public(db, public_id)
    comments = CommentRepository(db).list_for_public_calculation(public_id)
    flat = [CommentResponse.model_validate(c).model_dump() for c in comments]
    return build_comment_tree(flat)


@router.post(
    "/calculations/{public_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    public_id: int,
    comment: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    _get_public(db, public_id)
    repo = CommentRepository(db)

    if comment.parent_id is not None:
        parent = repo.get_by_id(comment.parent_id)
        if not parent or parent.public_calculation_id != public_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Parent comment {comment.parent_id} does not belong to this post",
            )

    try:
        new_comment = repo.create(
            public_calculation_id=public_id,
            user_id=current_user.id,
            user_name=current_user.name or DEFAULT_COMMENT_USER_NAME,
            user_photo_url=current_user.photo_url,
            text=comment.text,
            parent_id=comment.parent_id,
        )
        db.commit()
        db.refresh(new_comment)
        return new_comment
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create comment: {str(e)}",
        )


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = CommentRepository(db)
    existing = repo.get_by_id(comment_id)
    if not existing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Comment {comment_id} not found",
        )
    if existing.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )

    try:
        repo.delete(comment_id)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete comment: {str(e)}",
        )


@router.post(
    "/calculations/{public_id}/reports",
    response_model=ContentReportResponse,
    status_code=status.HTTP_201_CREATED,
)
def report_public_calculation(
    public_id: int,
    report: ContentReportCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Flag a post for admin review. The reported user is the post's owner."""
    public_calculation = _get_public(db, public_id)

    try:
        new_report = ContentReportRepository(db).create(
            public_calculation_id=public_id,
            reporter_user_id=current_user.id,
            reported_user_id=public_calculation.user_id,
            category=report.category,
            reason=report.reason,
            status=ReportStatus.OPEN.value,
        )
        db.commit()
        db.refresh(new_report)
        return new_report
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create report: {str(e)}",
        )
