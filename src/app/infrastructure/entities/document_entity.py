from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.app.core.domain.models import ClientDocumentType, PropertyDocumentType
from src.app.infrastructure.entities.client_entity import enum_column
from src.shared.database.database import Base


class ClientDocumentEntity(Base):
    """SQLAlchemy model for ClientDocument table."""
    __tablename__ = "client_documents"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255))
    type: Mapped[ClientDocumentType] = mapped_column(enum_column(ClientDocumentType), nullable=False)
    storage_key: Mapped[str] = mapped_column(String(512), nullable=False)
    # client ids as strings; a marriage certificate lists both spouses
    client_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255))
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )


class PropertyDocumentEntity(Base):
    """SQLAlchemy model for PropertyDocument table."""
    __tablename__ = "property_documents"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255))
    type: Mapped[PropertyDocumentType] = mapped_column(enum_column(PropertyDocumentType), nullable=False)
    storage_key: Mapped[str] = mapped_column(String(512), nullable=False)
    property_id: Mapped[UUID] = mapped_column(ForeignKey("properties.id"), nullable=False, index=True)
    mime_type: Mapped[str] = mapped_column(String(255))
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    contract_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
