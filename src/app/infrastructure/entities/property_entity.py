from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, Float, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.app.core.domain.models import PropertyStatus, PropertyType
from src.app.infrastructure.entities.client_entity import enum_column
from src.shared.database.database import Base


class PropertyEntity(Base):
    """SQLAlchemy model for Property table."""
    __tablename__ = "properties"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    zip_code: Mapped[str] = mapped_column(String(16), index=True)
    street: Mapped[str] = mapped_column(String(255))
    number: Mapped[str] = mapped_column(String(32))
    complement: Mapped[str | None] = mapped_column(String(255), nullable=True)
    neighborhood: Mapped[str] = mapped_column(String(255))
    city: Mapped[str] = mapped_column(String(255), index=True)
    state: Mapped[str] = mapped_column(String(64))
    type: Mapped[PropertyType] = mapped_column(enum_column(PropertyType), nullable=False)
    area: Mapped[float] = mapped_column(Float, nullable=False)
    value: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    status: Mapped[PropertyStatus] = mapped_column(
        enum_column(PropertyStatus),
        default=PropertyStatus.ACTIVE,
        nullable=False,
    )
    # client ids as strings
    owner_ids: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
