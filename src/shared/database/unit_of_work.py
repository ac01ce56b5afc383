from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.database import Database
from src.shared.database.entity_mapper import EntityMapper


class UnitOfWork:
    """
    Groups writes on several domain models into one database transaction.

    Usage:
        async with unit_of_work:
            unit_of_work.add(document)
            await unit_of_work.update(contract)

    The transaction commits when the block exits cleanly and rolls back when it raises.
    """

    def __init__(
        self,
        db: Database,
        entity_mapper: EntityMapper,
    ) -> None:
        self.db = db
        self.session: AsyncSession | None = None
        self.entity_mapper = entity_mapper

    async def __aenter__(self):
        self.session = self.db.session_maker()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            if self.session:
                await self.session.close()
                self.session = None

    @property
    def _session(self) -> AsyncSession:
        if self.session is None:
            raise RuntimeError("UnitOfWork used outside of 'async with' block")
        return self.session

    def _map_to_entity(self, model_instance: Any):
        return self.entity_mapper.map_to_entity(model_instance)

    def add(self, model_instance: Any):
        entity = self._map_to_entity(model_instance)
        self._session.add(entity)

    async def update(self, model_instance: Any):
        entity = self._map_to_entity(model_instance)
        await self._session.merge(entity)

    async def delete(self, model_instance: Any):
        # merge first so that a detached entity becomes persistent in this session
        entity = await self._session.merge(self._map_to_entity(model_instance))
        await self._session.delete(entity)

    async def commit(self):
        try:
            await self._session.commit()
        except Exception:
            await self.rollback()
            raise

    async def rollback(self):
        await self._session.rollback()
