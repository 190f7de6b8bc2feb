"""
Comment and content report repositories.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from genhpp.db.models import Comment, ContentReport
from genhpp.db.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for community comments."""

    def __init__(self, session: Session):
        super().__init__(Comment, session)

    def list_for_public_calculation(self, public_calculation_id: int) -> List[Comment]:
        """Flat comment list in posting order (created_at ascending)."""
        return (
            self.session.query(Comment)
            .filter(Comment.public_calculation_id == public_calculation_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )


class ContentReportRepository(BaseRepository[ContentReport]):
    """Repository for content reports raised against community posts."""

    def __init__(self, session: Session):
        super().__init__(ContentReport, session)

    def list_reports(self, status: Optional[str] = None, limit: int = 100, offset: int = 0) -> List[ContentReport]:
        query = self.session.query(ContentReport)
        if status:
            query = query.filter(ContentReport.status == status)
        return (
            query.order_by(ContentReport.created_at.desc(), ContentReport.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )
