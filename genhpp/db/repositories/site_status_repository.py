"""
Site status repository (single row, id = 1).
"""

from sqlalchemy.orm import Session

from genhpp.db.models import SiteStatus
from genhpp.db.repositories.base import BaseRepository

SITE_STATUS_ID = 1


class SiteStatusRepository(BaseRepository[SiteStatus]):
    """Repository for the global maintenance flags."""

    def __init__(self, session: Session):
        super().__init__(SiteStatus, session)

    def get_status(self) -> SiteStatus:
        """Return the status row, creating it with both flags off if missing."""
        status = self.get_by_id(SITE_STATUS_ID)
        if status is None:
            status = self.create(id=SITE_STATUS_ID, is_maintenance_mode=False, is_update_mode=False)
        return status

    def set_status(self, **flags) -> SiteStatus:
        status = self.get_status()
        return self.update(status.id, **flags)
