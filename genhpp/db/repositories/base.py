"""
Base repository shared by all GenHPP tables.

Repositories flush so new rows get their IDs, but never commit: the
request-scoped session from ``get_db_session`` owns the transaction and the
route decides when to commit or roll back.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

from genhpp.db.models import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    CRUD over one model class.

    Subclasses bind the model in ``__init__`` and add the queries their
    routes need (feeds, month ranges, matchmaking).
    """

    def __init__(self, model: Type[ModelType], session: Session):
        self.model = model
        self.session = session

    def _owned_by(self, query: Query, user_id: Optional[int]) -> Query:
        if user_id is not None and hasattr(self.model, "user_id"):
            query = query.filter(self.model.user_id == user_id)
        return query

    def create(self, **fields: Any) -> ModelType:
        """
        Add a row and flush it.

        Raises:
            IntegrityError: On a unique or check constraint violation
        """
        instance = self.model(**fields)
        self.session.add(instance)
        self.session.flush()
        return instance

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.session.get(self.model, id)

    def get_all(
        self,
        user_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
        newest_first: bool = False,
    ) -> List[ModelType]:
        """
        Page through rows, optionally only those owned by ``user_id``.

        Args:
            user_id: Owner filter, ignored for tables without ``user_id``
            limit: Page size
            offset: Rows to skip
            newest_first: Feed ordering (created_at, then id, descending);
                otherwise insertion order by id
        """
        query = self._owned_by(self.session.query(self.model), user_id)
        if newest_first and hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at.desc(), self.model.id.desc())
        else:
            query = query.order_by(self.model.id)
        return query.limit(limit).offset(offset).all()

    def update(self, id: int, **fields: Any) -> Optional[ModelType]:
        """Set the given columns on a row. Unknown names are skipped."""
        instance = self.get_by_id(id)
        if instance is None:
            return None
        for name, value in fields.items():
            if hasattr(instance, name):
                setattr(instance, name, value)
        self.session.flush()
        return instance

    def delete(self, id: int) -> bool:
        """Delete a row, letting ORM cascades remove its children. False if missing."""
        instance = self.get_by_id(id)
        if instance is None:
            return False
        self.session.delete(instance)
        self.session.flush()
        return True

    def exists(self, **filters: Any) -> bool:
        query = self.session.query(self.model.id)
        for name, value in filters.items():
            query = query.filter(getattr(self.model, name) == value)
        return query.first() is not None
