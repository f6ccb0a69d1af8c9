"""Transactional façade over the product repository."""

from loguru import logger

from src.catalog.core.paging import Page, PageRequest, Sort
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.entities.catalog.producto import Producto, ProductoRepository


class ProductoService:
    """Binds repository calls into units of work.

    Each public method opens its own session scope, so a transaction never
    outlives the method call. Persistence failures surface as
    ``DataAccessError``; lookups that miss return ``None``.
    """

    def __init__(self, database_service: DbSessionService) -> None:
        self._database_service = database_service

    def find_all(self, sort: Sort) -> list[Producto]:
        with self._database_service.session_scope() as session:
            return ProductoRepository(session).list_sorted(sort)

    def find_page(self, page_request: PageRequest) -> Page[Producto]:
        with self._database_service.session_scope() as session:
            return ProductoRepository(session).list_paged(page_request)

    def find_by_id(self, producto_id: int) -> Producto | None:
        with self._database_service.session_scope() as session:
            return ProductoRepository(session).find_by_id(producto_id)

    def get(self, producto_id: int) -> Producto | None:
        """Load the product alone, without its presentation."""
        with self._database_service.session_scope() as session:
            return ProductoRepository(session).get(producto_id)

    def save(self, producto: Producto) -> Producto:
        """Insert or replace ``producto`` in a single transaction."""
        with self._database_service.session_scope() as session:
            saved = ProductoRepository(session).save(producto)
        logger.info("Producto {} committed", saved.id)
        return saved

    def delete(self, producto: Producto) -> None:
        with self._database_service.session_scope() as session:
            ProductoRepository(session).delete(producto)
        logger.info("Producto {} deletion committed", producto.id)
