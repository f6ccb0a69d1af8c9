from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.catalog.api.http.app import app
from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.core.services.file_store import FileStoreService

__all__ = ["client"]


@pytest.fixture
def client(
    database_service: DbSessionService, file_store: FileStoreService
) -> Generator[TestClient]:
    """Test client wired to the in-memory database and a temporary file store.

    The lifespan is not run, so the application never builds its own engine.
    """
    previous = getattr(app.state, "app_dependencies", None)
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        file_store=file_store,
    )
    try:
        yield TestClient(app)
    finally:
        app.state.app_dependencies = previous
