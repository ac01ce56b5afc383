from src.shared.database.base_mapper import BaseEntityMapper, ensure_utc
from src.app.core.domain.models import NotaryOffice
from src.app.infrastructure.entities.notary_office_entity import NotaryOfficeEntity

_COPIED_FIELDS = (
    "id", "name", "code", "zip_code", "street", "number", "complement",
    "neighborhood", "city", "state", "phone", "email", "status",
)


class NotaryOfficeMapper(BaseEntityMapper[NotaryOffice, NotaryOfficeEntity]):
    """Mapper for converting between NotaryOffice domain model and NotaryOfficeEntity."""

    @staticmethod
    def to_entity(model_instance: NotaryOffice) -> NotaryOfficeEntity:
        return NotaryOfficeEntity(
            **{name: getattr(model_instance, name) for name in _COPIED_FIELDS},
            created_at=model_instance.created_at,
            updated_at=model_instance.updated_at,
        )

    @staticmethod
    def to_model(entity: NotaryOfficeEntity) -> NotaryOffice:
        return NotaryOffice(
            **{name: getattr(entity, name) for name in _COPIED_FIELDS},
            created_at=ensure_utc(entity.created_at),
            updated_at=ensure_utc(entity.updated_at),
        )
