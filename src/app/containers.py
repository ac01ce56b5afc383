"""Dependency injection container using dependency-injector library."""
from dependency_injector import containers, providers

from src.app.config import Settings
from src.shared.auth import StaticTokenAuthProvider
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.database.entity_mapper import EntityMapper
from src.shared.blob_storage.s3_blober import S3BlobStorage, S3BlobStorageSettings

from src.app.infrastructure.mappers import (
    ClientDocumentMapper,
    ClientMapper,
    ContractMapper,
    ContractTemplateMapper,
    NotaryOfficeMapper,
    PropertyDocumentMapper,
    PropertyMapper,
)

from src.app.infrastructure.client_repository import ClientRepository
from src.app.infrastructure.notary_office_repository import NotaryOfficeRepository
from src.app.infrastructure.property_repository import PropertyRepository
from src.app.infrastructure.document_repository import ClientDocumentRepository, PropertyDocumentRepository
from src.app.infrastructure.contract_repository import ContractRepository, ContractTemplateRepository

from src.app.core.services.spouse_links import SpouseLinkMaintainer
from src.app.core.services.client_service import ClientService
from src.app.core.services.notary_office_service import NotaryOfficeService
from src.app.core.services.property_service import PropertyService
from src.app.core.services.document_service import ClientDocumentService, PropertyDocumentService
from src.app.core.services.contract_template_service import ContractTemplateService
from src.app.core.services.contract_service import ContractService

from src.app.core.domain.models import (
    Client,
    ClientDocument,
    Contract,
    ContractTemplate,
    NotaryOffice,
    Property,
    PropertyDocument,
)

API_MODULES = [
    "src.app.api.dependencies",
    "src.app.api.v1.clients",
    "src.app.api.v1.documents",
    "src.app.api.v1.notary_offices",
    "src.app.api.v1.properties",
    "src.app.api.v1.property_documents",
    "src.app.api.v1.contract_templates",
    "src.app.api.v1.contracts",
]


def create_entity_mapper(
    client_mapper: ClientMapper,
    notary_office_mapper: NotaryOfficeMapper,
    property_mapper: PropertyMapper,
    client_document_mapper: ClientDocumentMapper,
    property_document_mapper: PropertyDocumentMapper,
    contract_template_mapper: ContractTemplateMapper,
    contract_mapper: ContractMapper,
) -> EntityMapper:
    """Factory function to create EntityMapper with proper mappings."""
    return (
        EntityMapper()
        .register(Client, client_mapper.to_entity)
        .register(NotaryOffice, notary_office_mapper.to_entity)
        .register(Property, property_mapper.to_entity)
        .register(ClientDocument, client_document_mapper.to_entity)
        .register(PropertyDocument, property_document_mapper.to_entity)
        .register(ContractTemplate, contract_template_mapper.to_entity)
        .register(Contract, contract_mapper.to_entity)
    )


class Container(containers.DeclarativeContainer):
    """Main application dependency injection container."""

    wiring_config = containers.WiringConfiguration(modules=API_MODULES)

    # =========================================================================
    # CONFIGURATION - Singleton (loaded once, cached)
    # =========================================================================
    config = providers.Singleton(Settings)

    # =========================================================================
    # SINGLETONS - Stateless Mappers (reusable across all requests)
    # =========================================================================
    client_mapper = providers.Singleton(ClientMapper)
    notary_office_mapper = providers.Singleton(NotaryOfficeMapper)
    property_mapper = providers.Singleton(PropertyMapper)
    client_document_mapper = providers.Singleton(ClientDocumentMapper)
    property_document_mapper = providers.Singleton(PropertyDocumentMapper)
    contract_template_mapper = providers.Singleton(ContractTemplateMapper)
    contract_mapper = providers.Singleton(ContractMapper)

    entity_mapper = providers.Singleton(
        create_entity_mapper,
        client_mapper=client_mapper,
        notary_office_mapper=notary_office_mapper,
        property_mapper=property_mapper,
        client_document_mapper=client_document_mapper,
        property_document_mapper=property_document_mapper,
        contract_template_mapper=contract_template_mapper,
        contract_mapper=contract_mapper,
    )

    # =========================================================================
    # SINGLETON - Database (shared connection pool)
    # =========================================================================
    database_settings = providers.Singleton(
        DatabaseSettings,
        db_url=config.provided.database_url,
        echo=config.provided.database_echo,
    )

    database = providers.Singleton(
        Database,
        db_settings=database_settings,
    )

    # =========================================================================
    # SINGLETON - S3 Storage
    # =========================================================================
    s3_storage_settings = providers.Singleton(
        S3BlobStorageSettings,
        bucket_name=config.provided.s3.bucket_name,
        endpoint_url=config.provided.s3.endpoint_url,
        region_name=config.provided.aws.region,
        aws_access_key_id=config.provided.aws.access_key_id,
        aws_secret_access_key=config.provided.aws.secret_access_key,
    )

    s3_storage = providers.Singleton(
        S3BlobStorage,
        settings=s3_storage_settings,
    )

    # =========================================================================
    # SINGLETON - Authentication
    # =========================================================================
    auth_provider = providers.Singleton(
        StaticTokenAuthProvider,
        api_tokens=config.provided.auth.api_tokens,
    )

    # =========================================================================
    # FACTORIES - Repositories (per-request, share database singleton)
    # =========================================================================
    client_repository = providers.Factory(ClientRepository, db=database, mapper=client_mapper)
    notary_office_repository = providers.Factory(NotaryOfficeRepository, db=database, mapper=notary_office_mapper)
    property_repository = providers.Factory(PropertyRepository, db=database, mapper=property_mapper)
    client_document_repository = providers.Factory(
        ClientDocumentRepository, db=database, mapper=client_document_mapper
    )
    property_document_repository = providers.Factory(
        PropertyDocumentRepository, db=database, mapper=property_document_mapper
    )
    contract_template_repository = providers.Factory(
        ContractTemplateRepository, db=database, mapper=contract_template_mapper
    )
    contract_repository = providers.Factory(ContractRepository, db=database, mapper=contract_mapper)

    # =========================================================================
    # FACTORY - Unit of Work (per-request)
    # =========================================================================
    unit_of_work = providers.Factory(
        UnitOfWork,
        db=database,
        entity_mapper=entity_mapper,
    )

    # =========================================================================
    # FACTORIES - Services
    # =========================================================================
    spouse_link_maintainer = providers.Factory(
        SpouseLinkMaintainer,
        store=client_repository,
    )

    client_service = providers.Factory(
        ClientService,
        repository=client_repository,
        spouse_links=spouse_link_maintainer,
    )

    notary_office_service = providers.Factory(
        NotaryOfficeService,
        repository=notary_office_repository,
        unit_of_work=unit_of_work,
    )

    property_service = providers.Factory(
        PropertyService,
        repository=property_repository,
        client_repository=client_repository,
        unit_of_work=unit_of_work,
    )

    client_document_service = providers.Factory(
        ClientDocumentService,
        client_repository=client_repository,
        document_repository=client_document_repository,
        unit_of_work=unit_of_work,
        blob_storage=s3_storage,
        download_url_expiration=config.provided.s3.download_url_expiration,
    )

    property_document_service = providers.Factory(
        PropertyDocumentService,
        property_repository=property_repository,
        document_repository=property_document_repository,
        unit_of_work=unit_of_work,
        blob_storage=s3_storage,
        download_url_expiration=config.provided.s3.download_url_expiration,
    )

    contract_template_service = providers.Factory(
        ContractTemplateService,
        repository=contract_template_repository,
        contract_repository=contract_repository,
        unit_of_work=unit_of_work,
    )

    contract_service = providers.Factory(
        ContractService,
        repository=contract_repository,
        template_repository=contract_template_repository,
        property_repository=property_repository,
        client_repository=client_repository,
        notary_office_repository=notary_office_repository,
        property_document_repository=property_document_repository,
        unit_of_work=unit_of_work,
        blob_storage=s3_storage,
    )
