from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import Date, DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.app.core.domain.models import ClientStatus, MaritalStatus, PropertyRegime
from src.shared.database.database import Base


def enum_column(enum_class):
    """Enum column stored by value rather than by member name."""
    return Enum(enum_class, values_callable=lambda x: [e.value for e in x])


class ClientEntity(Base):
    """SQLAlchemy model for Client table."""
    __tablename__ = "clients"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), index=True)
    email: Mapped[str] = mapped_column(String(255), index=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    tax_id: Mapped[str] = mapped_column(String(32), index=True)
    status: Mapped[ClientStatus] = mapped_column(
        enum_column(ClientStatus),
        default=ClientStatus.ACTIVE,
        nullable=False,
    )
    marital_status: Mapped[MaritalStatus | None] = mapped_column(enum_column(MaritalStatus), nullable=True)
    property_regime: Mapped[PropertyRegime | None] = mapped_column(enum_column(PropertyRegime), nullable=True)
    # no foreign key: links are repaired by the application and may briefly point at a missing record
    spouse_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)
    wedding_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    father_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mother_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
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
