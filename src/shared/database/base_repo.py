import abc
from typing import Any, Generic, Iterable, TypeVar, Optional
from uuid import UUID

from sqlalchemy import Executable, delete, select, update

from src.shared.database.base_mapper import BaseEntityMapper
from src.shared.database.database import Database


TEntity = TypeVar("TEntity")
TModel = TypeVar("TModel")


class BaseRepository(abc.ABC, Generic[TEntity, TModel]):
    """
    Read helpers plus single-statement writes for one entity type.

    Subclasses set ``entity_class`` to the SQLAlchemy entity they manage. Every
    method opens its own session, so each write here commits on its own; use
    UnitOfWork when several records must change together.
    """

    entity_class: type

    def __init__(self, db: Database, mapper: BaseEntityMapper[TModel, TEntity]):
        self.db = db
        self.mapper = mapper

    async def find_one(self, statement: Executable) -> Optional[TModel]:
        async with self.db.session_maker() as session:
            result = await session.execute(statement)
            entity = result.scalar_one_or_none()
            if entity is None:
                return None
            return self.mapper.to_model(entity)

    async def find_all(self, statement: Executable) -> list[TModel]:
        async with self.db.session_maker() as session:
            result = await session.execute(statement)
            entities = list(result.scalars().all())
            return self.mapper.to_models(entities)

    async def get_by_id(self, entity_id: UUID) -> Optional[TModel]:
        return await self.find_one(
            select(self.entity_class).where(self.entity_class.id == entity_id)
        )

    async def get_many(self, entity_ids: Iterable[UUID]) -> list[TModel]:
        """Return the records that exist, in the order the ids were given."""
        ids = list(entity_ids)
        if not ids:
            return []
        found = await self.find_all(
            select(self.entity_class).where(self.entity_class.id.in_(ids))
        )
        by_id = {model.id: model for model in found}  # type: ignore[attr-defined]
        return [by_id[entity_id] for entity_id in ids if entity_id in by_id]

    async def list_all(self) -> list[TModel]:
        return await self.find_all(select(self.entity_class))

    async def insert(self, model_instance: TModel) -> None:
        async with self.db.session_maker() as session:
            session.add(self.mapper.to_entity(model_instance))
            await session.commit()

    async def update_fields(self, entity_id: UUID, values: dict[str, Any]) -> bool:
        """
        Apply a partial update to one record in its own transaction.

        Returns:
            False if no record with the given ID exists
        """
        statement = (
            update(self.entity_class)
            .where(self.entity_class.id == entity_id)
            .values(**values)
        )
        async with self.db.session_maker() as session:
            result = await session.execute(statement)
            await session.commit()
            return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_id(self, entity_id: UUID) -> bool:
        statement = delete(self.entity_class).where(self.entity_class.id == entity_id)
        async with self.db.session_maker() as session:
            result = await session.execute(statement)
            await session.commit()
            return result.rowcount > 0  # type: ignore[attr-defined]
