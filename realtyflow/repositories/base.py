"""
Base repository class with common CRUD operations using async SQLAlchemy.
Provides generic database operations that can be extended by specific repositories.

Every write takes a ``commit`` flag. Services that need several writes to land
together pass ``commit=False`` and commit once through ``BaseRepository.commit``.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.sql import Select
from realtyflow.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common CRUD operations.
    Uses async SQLAlchemy for all database operations with proper error handling.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    def _select(self, for_update: bool = False) -> Select:
        """
        Select statement that refreshes rows already present in the session.
        Bulk writes bypass the identity map, so reads always repopulate.

        With ``for_update`` the row stays locked until the transaction ends.
        Dialects without row locks (SQLite) render no lock clause.
        """
        query = select(self.model).execution_options(populate_existing=True)
        if for_update:
            query = query.with_for_update()
        return query

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    async def _finish(self, commit: bool) -> None:
        if commit:
            await self.db.commit()
        else:
            await self.db.flush()

    async def create(self, obj_in: Dict[str, Any], commit: bool = True) -> ModelType:
        """
        Create a new record in the database.

        Args:
            obj_in: Dictionary of field values for the new record
            commit: Commit immediately, or only flush into the open transaction

        Returns:
            Created model instance
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self._finish(commit)
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise

    async def get_by_id(self, id: uuid.UUID, for_update: bool = False) -> Optional[ModelType]:
        """
        Get a record by its ID, optionally locking the row.

        Returns:
            Model instance if found, None otherwise
        """
        try:
            result = await self.db.execute(self._select(for_update).where(self.model.id == id))
            obj = result.scalar_one_or_none()

            if obj is None:
                logger.debug(f"{self.model.__name__} with id {id} not found")

            return obj
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by id {id}: {e}")
            raise

    async def get_multi(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None
    ) -> List[ModelType]:
        """
        Get multiple records with optional equality filters and ordering.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return, unbounded when None
            filters: Dictionary of field filters; list values become IN clauses
            order_by: Field name to order by (prefix with '-' for descending)
        """
        try:
            query = self._apply_filters(self._select(), filters)

            if order_by:
                field_name = order_by.lstrip("-")
                if hasattr(self.model, field_name):
                    column = getattr(self.model, field_name)
                    query = query.order_by(column.desc() if order_by.startswith("-") else column)
            else:
                query = query.order_by(self.model.created_at.desc())

            if skip:
                query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)

            result = await self.db.execute(query)
            objects = result.scalars().all()

            logger.debug(f"Retrieved {len(objects)} {self.model.__name__} records")
            return list(objects)
        except Exception as e:
            logger.error(f"Failed to get multiple {self.model.__name__} records: {e}")
            raise

    def _apply_filters(self, query, filters: Optional[Dict[str, Any]]):
        if not filters:
            return query
        for field, value in filters.items():
            if not hasattr(self.model, field):
                raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")
            column = getattr(self.model, field)
            if isinstance(value, (list, tuple, set)):
                query = query.where(column.in_(value))
            else:
                query = query.where(column == value)
        return query

    async def update(self, id: uuid.UUID, obj_in: Dict[str, Any], commit: bool = True) -> Optional[ModelType]:
        """
        Update a record by its ID. None values are skipped.

        Returns:
            Updated model instance if found, None otherwise
        """
        try:
            db_obj = await self.get_by_id(id)
            if db_obj is None:
                logger.debug(f"{self.model.__name__} with id {id} not found for update")
                return None

            update_data = {k: v for k, v in obj_in.items() if v is not None}
            if not update_data:
                logger.warning(f"No valid data provided for updating {self.model.__name__} {id}")
                return db_obj

            for field, value in update_data.items():
                setattr(db_obj, field, value)

            await self._finish(commit)
            await self.db.refresh(db_obj)
            logger.debug(f"Updated {self.model.__name__} with id: {id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update {self.model.__name__} {id}: {e}")
            raise

    async def delete(self, id: uuid.UUID, commit: bool = True) -> bool:
        """
        Delete a record by its ID.

        Returns:
            True if record was deleted, False if not found
        """
        try:
            stmt = (
                delete(self.model)
                .where(self.model.id == id)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self._finish(commit)

            deleted = result.rowcount > 0
            if deleted:
                logger.debug(f"Deleted {self.model.__name__} with id: {id}")
            else:
                logger.debug(f"{self.model.__name__} with id {id} not found for deletion")

            return deleted
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {id}: {e}")
            raise

    async def delete_where(self, filters: Dict[str, Any], commit: bool = True) -> int:
        """
        Delete every record matching the equality filters.

        Returns:
            Number of records deleted
        """
        if not filters:
            raise ValueError("delete_where requires at least one filter")
        try:
            stmt = self._apply_filters(delete(self.model), filters)
            result = await self.db.execute(stmt.execution_options(synchronize_session=False))
            await self._finish(commit)

            logger.debug(f"Deleted {result.rowcount} {self.model.__name__} records matching {filters}")
            return result.rowcount
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} records matching {filters}: {e}")
            raise

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records with optional equality filters."""
        try:
            query = self._apply_filters(select(func.count(self.model.id)), filters)
            result = await self.db.execute(query)
            return result.scalar()
        except Exception as e:
            logger.error(f"Failed to count {self.model.__name__} records: {e}")
            raise

    async def get_by_field(self, field: str, value: Any, for_update: bool = False) -> Optional[ModelType]:
        """
        Get a record by a specific field value.

        Returns:
            Model instance if found, None otherwise
        """
        if not hasattr(self.model, field):
            raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")
        try:
            query = self._select(for_update).where(getattr(self.model, field) == value)
            result = await self.db.execute(query)
            return result.scalars().first()
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by {field}={value}: {e}")
            raise
