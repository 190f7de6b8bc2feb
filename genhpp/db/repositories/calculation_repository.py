"""
Calculation repository for database operations.

Provides CRUD operations and queries specific to saved HPP calculations,
including the public (community) copy kept in sync with each calculation.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from genhpp.db.models import Calculation, PublicCalculation
from genhpp.db.repositories.base import BaseRepository

# Fields copied verbatim from a calculation to its public copy
SHARED_FIELDS = (
    "product_name",
    "materials",
    "labor_cost",
    "overhead",
    "packaging",
    "margin",
    "product_quantity",
    "total_hpp",
    "suggested_price",
    "production_tips",
    "product_image_url",
)


class CalculationRepository(BaseRepository[Calculation]):
    """Repository for Calculation database operations."""

    def __init__(self, session: Session):
        """Initialize calculation repository."""
        super().__init__(Calculation, session)

    def list_for_user(self, user_id: int, limit: int = 100, offset: int = 0) -> List[Calculation]:
        """User's calculations, newest first."""
        return self.get_all(user_id=user_id, limit=limit, offset=offset, newest_first=True)

    def list_in_range(self, user_id: int, start: datetime, end: datetime) -> List[Calculation]:
        """
        Calculations created within [start, end].

        Args:
            user_id: User ID
            start: Inclusive lower bound
            end: Inclusive upper bound
        """
        return (
            self.session.query(Calculation)
            .filter(
                Calculation.user_id == user_id,
                Calculation.created_at >= start,
                Calculation.created_at <= end,
            )
            .order_by(Calculation.created_at.desc(), Calculation.id.desc())
            .all()
        )


class PublicCalculationRepository(BaseRepository[PublicCalculation]):
    """Repository for community copies of shared calculations."""

    def __init__(self, session: Session):
        super().__init__(PublicCalculation, session)

    def get_by_calculation_id(self, calculation_id: int) -> Optional[PublicCalculation]:
        return (
            self.session.query(PublicCalculation)
            .filter(PublicCalculation.calculation_id == calculation_id)
            .first()
        )

    def feed(self, limit: int = 50, offset: int = 0) -> List[PublicCalculation]:
        """Public feed, newest first."""
        return self.get_all(limit=limit, offset=offset, newest_first=True)

    def upsert_from_calculation(
        self,
        calculation: Calculation,
        user_name: str,
        user_photo_url: Optional[str] = None,
    ) -> PublicCalculation:
        """
        Create or refresh the public copy of a calculation.

        Args:
            calculation: Source calculation (already flushed, has an id)
            user_name: Display name shown in the feed
            user_photo_url: Optional avatar URL

        Returns:
            The public copy
        """
        values = {field: getattr(calculation, field) for field in SHARED_FIELDS}
        values.update(user_name=user_name, user_photo_url=user_photo_url)

        existing = self.get_by_calculation_id(calculation.id)
        if existing:
            return self.update(existing.id, **values)

        return self.create(calculation_id=calculation.id, user_id=calculation.user_id, **values)

    def delete_for_calculation(self, calculation_id: int) -> bool:
        """Remove the public copy of a calculation if there is one."""
        existing = self.get_by_calculation_id(calculation_id)
        if not existing:
            return False
        return self.delete(existing.id)
