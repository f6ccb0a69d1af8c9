"""Schema bootstrap for the catalog tables."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        from src.catalog.entities.catalog.presentacion import PresentacionTable  # noqa: F401
        from src.catalog.entities.catalog.producto import ProductoTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Catalog schema is up to date")
