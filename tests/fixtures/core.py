from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from sqlalchemy import StaticPool, event
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from src.catalog.core.services.database.db_manage import DbManageService
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.core.services.file_store import FileStoreService
from src.catalog.core.services.producto_service import ProductoService
from src.catalog.entities.catalog.presentacion import PresentacionTable
from src.catalog.entities.catalog.producto import ProductoTable

__all__ = [
    "engine",
    "database_service",
    "session",
    "file_store",
    "producto_service",
    "statement_counter",
    "seed_presentacion",
    "seed_producto",
]


@pytest.fixture
def engine() -> Generator[Engine]:
    """In-memory SQLite engine with the catalog schema; one per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    DbManageService(engine).create_all()
    yield engine
    engine.dispose()


@pytest.fixture
def database_service(engine: Engine) -> DbSessionService:
    return DbSessionService(engine=engine)


@pytest.fixture
def session(database_service: DbSessionService) -> Generator[Session]:
    """A plain session for seeding rows and driving repositories directly."""
    with database_service.get_session() as session:
        try:
            yield session
        finally:
            session.rollback()


@pytest.fixture
def file_store(tmp_path: Path) -> FileStoreService:
    return FileStoreService(tmp_path / "uploads")


@pytest.fixture
def producto_service(database_service: DbSessionService) -> ProductoService:
    return ProductoService(database_service)


@pytest.fixture
def statement_counter(engine: Engine) -> Generator[list[str]]:
    """Collect every SQL statement sent to the engine while the test runs.

    Tests clear the list right before the call they want to measure.
    """
    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        if not statement.lstrip().upper().startswith("PRAGMA"):
            statements.append(statement)

    event.listen(engine, "before_cursor_execute", _record)
    yield statements
    event.remove(engine, "before_cursor_execute", _record)


@pytest.fixture
def seed_presentacion(database_service: DbSessionService) -> Callable[..., int]:
    """Insert a presentation row in its own transaction and return its id."""

    def _seed(nombre: str = "Caja", descripcion: str | None = None) -> int:
        with database_service.session_scope() as db:
            row = PresentacionTable(nombre=nombre, descripcion=descripcion)
            db.add(row)
            db.flush()
            return row.id

    return _seed


@pytest.fixture
def seed_producto(database_service: DbSessionService) -> Callable[..., int]:
    """Insert a product row in its own transaction and return its id."""

    def _seed(nombre: str, **columns) -> int:
        with database_service.session_scope() as db:
            row = ProductoTable(nombre=nombre, **columns)
            db.add(row)
            db.flush()
            return row.id

    return _seed
