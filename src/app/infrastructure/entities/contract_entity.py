from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.app.core.domain.models import ContractStatus, ContractTemplateStatus
from src.app.infrastructure.entities.client_entity import enum_column
from src.shared.database.database import Base


class ContractTemplateEntity(Base):
    """SQLAlchemy model for ContractTemplate table."""
    __tablename__ = "contract_templates"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ContractTemplateStatus] = mapped_column(
        enum_column(ContractTemplateStatus),
        default=ContractTemplateStatus.ACTIVE,
        nullable=False,
    )
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


class ContractEntity(Base):
    """SQLAlchemy model for Contract table."""
    __tablename__ = "contracts"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    template_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("contract_templates.id"), nullable=True, index=True
    )
    property_id: Mapped[UUID] = mapped_column(ForeignKey("properties.id"), nullable=False, index=True)
    client_id: Mapped[UUID] = mapped_column(ForeignKey("clients.id"), nullable=False, index=True)
    # offices are hard-deleted, so no foreign key
    notary_office_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ContractStatus] = mapped_column(
        enum_column(ContractStatus),
        default=ContractStatus.DRAFT,
        nullable=False,
    )
    pdf_storage_key: Mapped[str | None] = mapped_column(String(512), nullable=True)
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
