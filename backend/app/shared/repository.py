"""
Base repository with common CRUD operations.

Provides generic database operations for all feature repositories.
Uses SQLAlchemy async session for non-blocking database access.

Conflict-aware writes (insert-or-skip, upsert) go through the dialect's
own INSERT construct so that uniqueness is enforced by the database in a
single statement, not by a check-then-write.

Usage:
    class DropRepository(BaseRepository[Drop]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, Drop)

        async def get_by_slug(self, slug: str) -> Drop | None:
            return await self.get_by(slug=slug)
"""

from typing import Any, Generic, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database operations.

    Provides common CRUD methods that can be inherited by feature repositories.
    All methods are async for use with AsyncSession.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    async def get_by_id(self, id: str | int) -> T | None:
        """
        Get entity by primary key ID.

        Args:
            id: Primary key value (string UUID or integer)

        Returns:
            Entity if found, None otherwise
        """
        return await self.db.get(self.model, id)

    async def get_by(self, **kwargs) -> T | None:
        """
        Get single entity by arbitrary field values.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            First matching entity or None
        """
        query = select(self.model)
        for key, value in kwargs.items():
            query = query.where(getattr(self.model, key) == value)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def create(self, **kwargs) -> T:
        """
        Create new entity.

        Args:
            **kwargs: Field values for new entity

        Returns:
            Created entity with generated ID
        """
        entity = self.model(**kwargs)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: T, **kwargs) -> T:
        """
        Update entity fields.

        Args:
            entity: Entity to update
            **kwargs: Field values to update

        Returns:
            Updated entity
        """
        for key, value in kwargs.items():
            setattr(entity, key, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    # -------------------------------------------------------------------------
    # Conflict-aware writes
    # -------------------------------------------------------------------------

    def _insert(self):
        """INSERT construct for the session's dialect (ON CONFLICT support)."""
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(self.model)
        if dialect == "sqlite":
            return sqlite.insert(self.model)
        raise NotImplementedError(f"ON CONFLICT not supported for dialect {dialect!r}")

    async def insert_or_ignore(
        self,
        conflict_columns: Sequence[str],
        **values: Any
    ) -> bool:
        """
        Insert a row unless the unique key already exists.

        Args:
            conflict_columns: Columns of the unique constraint
            **values: Column values for the new row

        Returns:
            True if a row was inserted, False if it already existed
        """
        pk = self.model.__mapper__.primary_key[0]
        stmt = (
            self._insert()
            .values(**values)
            .on_conflict_do_nothing(index_elements=list(conflict_columns))
            .returning(pk)
        )
        result = await self.db.execute(stmt)
        return result.first() is not None

    async def upsert(
        self,
        conflict_columns: Sequence[str],
        values: dict[str, Any]
    ) -> None:
        """
        Insert a row or overwrite every given column on conflict.

        Args:
            conflict_columns: Columns of the unique constraint
            values: Column values (all of them are written on update)
        """
        stmt = self._insert().values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=list(conflict_columns),
            set_={
                key: getattr(stmt.excluded, key)
                for key in values
                if key not in conflict_columns
            },
        )
        await self.db.execute(stmt)

    async def insert_from_select_or_ignore(
        self,
        conflict_columns: Sequence[str],
        columns: Sequence[str],
        source: Any
    ) -> None:
        """
        INSERT ... SELECT, skipping rows whose unique key already exists.

        Args:
            conflict_columns: Columns of the unique constraint
            columns: Target columns, in the order `source` selects them
            source: SELECT producing the rows (must carry a WHERE clause)
        """
        stmt = (
            self._insert()
            .from_select(list(columns), source)
            .on_conflict_do_nothing(index_elements=list(conflict_columns))
        )
        await self.db.execute(stmt)
