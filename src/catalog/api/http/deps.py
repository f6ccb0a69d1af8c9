"""FastAPI dependency implementations."""

from fastapi import Depends, Request

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.core.services.file_store import FileStoreService
from src.catalog.core.services.producto_service import ProductoService


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> DbSessionService:
    """Get the shared database session service."""
    return app_deps.database_service


def get_file_store(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> FileStoreService:
    """Get the uploaded image file store."""
    return app_deps.file_store


def get_producto_service(
    database_service: DbSessionService = Depends(get_database_service),
) -> ProductoService:
    """Get a product service bound to the shared database service."""
    return ProductoService(database_service)
