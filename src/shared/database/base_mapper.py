import abc
from datetime import datetime, UTC
from typing import Generic, Iterable, TypeVar


TModel = TypeVar("TModel")
TEntity = TypeVar("TEntity")


class BaseEntityMapper(abc.ABC, Generic[TModel, TEntity]):
    """Converts one domain model type to and from its database entity."""

    @staticmethod
    @abc.abstractmethod
    def to_entity(model_instance: TModel) -> TEntity:
        pass

    @staticmethod
    @abc.abstractmethod
    def to_model(entity: TEntity) -> TModel:
        pass

    @classmethod
    def to_models(cls, entities: Iterable[TEntity]) -> list[TModel]:
        return [cls.to_model(entity) for entity in entities]


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps read back from backends that drop the offset."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
