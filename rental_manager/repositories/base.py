"""
Generic async repository shared by the property, room and lead repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from rental_manager.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    CRUD primitives for one model class.

    Every mutating method commits on success and rolls back on failure before
    re-raising. Reads repopulate objects already held by the session, so a
    room list loaded before a room insert or delete is never served stale.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def _name(self) -> str:
        return self.model.__name__

    def _loader_options(self) -> tuple:
        """Eager loads applied to every entity read; subclasses extend this."""
        return ()

    def _select(self):
        return (
            select(self.model)
            .options(*self._loader_options())
            .execution_options(populate_existing=True)
        )

    def _apply_filters(self, query, filters: Optional[Dict[str, Any]]):
        for field, value in (filters or {}).items():
            column = getattr(self.model, field, None)
            if column is None:
                continue
            query = query.where(column.in_(value) if isinstance(value, list) else column == value)
        return query

    def _ordering(self, order_by: Optional[str]):
        """Translate ``"field"`` / ``"-field"`` into order clauses; creation order by default."""
        if order_by:
            descending = order_by.startswith("-")
            column = getattr(self.model, order_by.lstrip("-"), None)
            if column is not None:
                return [column.desc() if descending else column.asc()]
        return [self.model.created_at.asc(), self.model.id.asc()]

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Insert a new row.

        Raises:
            SQLAlchemyError: If the insert fails; the session is rolled back
        """
        db_obj = self.model(**obj_in)
        self.db.add(db_obj)
        try:
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Insert into {self.model.__tablename__} failed: {e}")
            raise
        await self.db.refresh(db_obj)
        logger.debug(f"{self._name} {db_obj.id} inserted")
        return db_obj

    async def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        result = await self.db.execute(self._select().where(self.model.id == id))
        obj = result.scalar_one_or_none()
        logger.debug(f"{self._name} {id} {'loaded' if obj else 'missing'}")
        return obj

    async def get_multi(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None
    ) -> List[ModelType]:
        """
        Fetch rows matching ``filters``.

        Args:
            skip: Rows to skip
            limit: Maximum rows to return, None for all
            filters: Column equality filters; list values match any element
            order_by: Column name, prefixed with '-' for descending

        Returns:
            Matching rows, oldest first unless ``order_by`` is given
        """
        query = self._apply_filters(self._select(), filters).order_by(*self._ordering(order_by))
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        rows = list((await self.db.execute(query)).scalars().all())
        logger.debug(f"{len(rows)} {self._name} rows fetched (filters={filters})")
        return rows

    async def update(self, id: uuid.UUID, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """
        Write the given columns of one row.

        Keys present in ``obj_in`` are written as given, ``None`` included;
        absent keys are untouched. An empty mapping writes nothing and leaves
        ``updated_at`` alone.

        Returns:
            The reloaded row, or None if no row has this id
        """
        values = {key: value for key, value in obj_in.items() if hasattr(self.model, key)}
        if not values:
            return await self.get_by_id(id)

        try:
            result = await self.db.execute(
                update(self.model).where(self.model.id == id).values(**values)
            )
            if result.rowcount == 0:
                await self.db.rollback()
                return None
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Update of {self._name} {id} failed: {e}")
            raise

        logger.debug(f"{self._name} {id} updated: {sorted(values)}")
        return await self.get_by_id(id)

    async def delete(self, id: uuid.UUID) -> bool:
        """Delete one row; returns False when nothing matched."""
        try:
            result = await self.db.execute(delete(self.model).where(self.model.id == id))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Delete of {self._name} {id} failed: {e}")
            raise

        return result.rowcount > 0

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        query = self._apply_filters(select(func.count(self.model.id)), filters)
        return (await self.db.execute(query)).scalar()

    async def exists(self, id: uuid.UUID) -> bool:
        return await self.count(filters={"id": id}) > 0
