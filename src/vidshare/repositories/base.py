"""
Base repository interface and implementation.

Provides the store contract every entity repository builds on: fetch by
id, find by filter descriptor, insert, update, delete and count.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar, Union

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase

from vidshare.feed.predicates import build_filter, where_clauses

# Type variables for generic repository
ModelType = TypeVar("ModelType", bound=DeclarativeBase)
CreateSchemaType = TypeVar("CreateSchemaType")
UpdateSchemaType = TypeVar("UpdateSchemaType")


class BaseRepository(ABC, Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Base repository interface defining the store contract.

    Filters are keyword arguments checked against the allow-list of the
    model's table (see :func:`vidshare.feed.predicates.build_filter`).
    """

    @abstractmethod
    async def create(
        self, session: AsyncSession, *, obj_in: CreateSchemaType
    ) -> ModelType:
        """Insert a new entity."""
        pass

    @abstractmethod
    async def get(self, session: AsyncSession, id: Any) -> Optional[ModelType]:
        """Get entity by ID."""
        pass

    @abstractmethod
    async def find(self, session: AsyncSession, **filters: Any) -> List[ModelType]:
        """Get every entity matching the filter."""
        pass

    @abstractmethod
    async def update(
        self,
        session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, dict[str, Any]],
    ) -> ModelType:
        """Update an existing entity."""
        pass

    @abstractmethod
    async def delete(self, session: AsyncSession, *, id: Any) -> Optional[ModelType]:
        """Delete an entity by ID."""
        pass


class BaseSQLAlchemyRepository(
    BaseRepository[ModelType, CreateSchemaType, UpdateSchemaType]
):
    """
    Base SQLAlchemy repository implementation.

    Models are expected to have a single-column ``id`` primary key;
    repositories for tables without one override the id-based methods.
    """

    def __init__(self, model: type[ModelType]):
        self.model = model

    @property
    def collection(self) -> str:
        """Table name, used to select the filter allow-list."""
        return str(self.model.__tablename__)

    def _where(self, filters: dict[str, Any]) -> list[Any]:
        return where_clauses(self.model, build_filter(self.collection, **filters))

    async def create(
        self, session: AsyncSession, *, obj_in: CreateSchemaType
    ) -> ModelType:
        """Create a new entity in the database."""
        if hasattr(obj_in, "model_dump"):
            obj_data = obj_in.model_dump()
        else:
            obj_data = obj_in if isinstance(obj_in, dict) else obj_in.__dict__

        db_obj = self.model(**obj_data)
        session.add(db_obj)
        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def get(self, session: AsyncSession, id: Any) -> Optional[ModelType]:
        """Get entity by primary key."""
        result = await session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def find_one(self, session: AsyncSession, **filters: Any) -> Optional[ModelType]:
        """Get the first entity matching the filter, if any."""
        result = await session.execute(
            select(self.model).where(*self._where(filters)).limit(1)
        )
        return result.scalars().first()

    async def find(self, session: AsyncSession, **filters: Any) -> List[ModelType]:
        """Get every entity matching the filter."""
        result = await session.execute(select(self.model).where(*self._where(filters)))
        return list(result.scalars().all())

    async def get_multi(
        self, session: AsyncSession, *, skip: int = 0, limit: int = 100
    ) -> List[ModelType]:
        """Get multiple entities with pagination."""
        result = await session.execute(select(self.model).offset(skip).limit(limit))
        return list(result.scalars().all())

    async def update(
        self,
        session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, dict[str, Any]],
    ) -> ModelType:
        """Update an existing entity with the fields that were set."""
        if hasattr(obj_in, "model_dump"):
            update_data = obj_in.model_dump(exclude_unset=True)
        else:
            update_data = obj_in if isinstance(obj_in, dict) else obj_in.__dict__

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        session.add(db_obj)
        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def delete(self, session: AsyncSession, *, id: Any) -> Optional[ModelType]:
        """Delete an entity by ID."""
        db_obj = await self.get(session, id)
        if db_obj:
            await session.delete(db_obj)
            await session.flush()
        return db_obj

    async def delete_where(self, session: AsyncSession, **filters: Any) -> int:
        """Delete every entity matching the filter and return how many went."""
        result = await session.execute(
            sa_delete(self.model).where(*self._where(filters))
        )
        return int(result.rowcount or 0)  # type: ignore[attr-defined]

    async def exists(self, session: AsyncSession, id: Any) -> bool:
        """Check if entity exists by ID."""
        result = await session.execute(
            select(self.model.id).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.first() is not None

    async def count(self, session: AsyncSession, **filters: Any) -> int:
        """Count entities matching the filter."""
        result = await session.execute(
            select(func.count()).select_from(self.model).where(*self._where(filters))
        )
        return int(result.scalar_one())
