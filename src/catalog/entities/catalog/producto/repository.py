"""Producto repository for data access operations."""

from loguru import logger
from sqlalchemy import func, text
from sqlalchemy.orm import contains_eager, noload
from sqlmodel import Session, select

from src.catalog.core.paging import Direction, Page, PageRequest, Sort
from src.catalog.entities._base import ID_MAX, ID_MIN
from src.catalog.entities.catalog.producto.entity import Producto
from src.catalog.entities.catalog.producto.table import ProductoTable

# Entity field names (and their JSON aliases) accepted as sort keys
_SORTABLE_COLUMNS = {
    "id": ProductoTable.id,
    "nombre": ProductoTable.nombre,
    "descripcion": ProductoTable.descripcion,
    "precio": ProductoTable.precio,
    "stock": ProductoTable.stock,
    "imagen_producto": ProductoTable.imagen_producto,
    "imagenProducto": ProductoTable.imagen_producto,
}


class ProductoRepository:
    """Data-access layer for products.

    Every read that returns a product with its presentation does so in a
    single statement: ``producto LEFT OUTER JOIN presentacion`` with the
    association populated from the joined columns. ``get`` is the only
    product-only read and never touches the association.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _joined_select(self):
        return (
            select(ProductoTable)
            .outerjoin(ProductoTable.presentacion)
            .options(contains_eager(ProductoTable.presentacion))
            .execution_options(populate_existing=True)
        )

    @staticmethod
    def _order_by(sort: Sort) -> list:
        clauses = []
        sorted_by_id = False
        for order in sort:
            column = _SORTABLE_COLUMNS.get(order.name)
            if column is None:
                raise ValueError(f"No se puede ordenar por el campo '{order.name}'")
            sorted_by_id = sorted_by_id or column is ProductoTable.id
            clauses.append(column.desc() if order.direction is Direction.DESC else column.asc())
        # Ties are always broken by id so that pages never overlap
        if not sorted_by_id:
            clauses.append(ProductoTable.id.asc())
        return clauses

    @staticmethod
    def _to_entity(row: ProductoTable) -> Producto:
        return Producto.model_validate(row, from_attributes=True)

    def list_sorted(self, sort: Sort) -> list[Producto]:
        """Return every product with its presentation, ordered by ``sort``."""
        statement = self._joined_select().order_by(*self._order_by(sort))
        rows = self._session.exec(statement).all()
        return [self._to_entity(row) for row in rows]

    def list_paged(self, page_request: PageRequest) -> Page[Producto]:
        """Return one page of products with their presentations.

        The data statement join-fetches the presentation; the count statement
        counts product rows only.
        """
        statement = (
            self._joined_select()
            .order_by(*self._order_by(page_request.sort))
            .offset(page_request.offset)
            .limit(page_request.size)
        )
        rows = self._session.exec(statement).all()

        count_statement = select(func.count()).select_from(ProductoTable)
        total = self._session.exec(count_statement).one()

        return Page(
            items=[self._to_entity(row) for row in rows],
            total=total,
            request=page_request,
        )

    def find_by_id(self, producto_id: int) -> Producto | None:
        """Return the product with its presentation, or ``None``."""
        if not ID_MIN <= producto_id <= ID_MAX:
            return None
        statement = self._joined_select().where(ProductoTable.id == producto_id)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return self._to_entity(row)

    def _get_row(self, producto_id: int) -> ProductoTable | None:
        if not ID_MIN <= producto_id <= ID_MAX:
            return None
        statement = (
            select(ProductoTable)
            .where(ProductoTable.id == producto_id)
            .options(noload(ProductoTable.presentacion))
            .execution_options(populate_existing=True)
        )
        return self._session.exec(statement).first()

    def get(self, producto_id: int) -> Producto | None:
        """Return the product without loading its presentation."""
        row = self._get_row(producto_id)
        if row is None:
            return None
        return self._to_entity(row)

    def save(self, producto: Producto) -> Producto:
        """Insert ``producto`` when it has no id, otherwise replace the row.

        A product carrying an id that does not exist yet is inserted with
        that id.
        """
        row = ProductoTable.from_entity(producto)
        inserted_with_id = False
        if row.id is None:
            self._session.add(row)
        else:
            row = self._session.merge(row)
            inserted_with_id = row in self._session.new
        self._session.flush()
        if inserted_with_id:
            self._advance_id_sequence()
        logger.info("Saved producto {}", row.id)

        saved = self.find_by_id(row.id)
        if saved is None:
            raise LookupError(f"Producto {row.id} not visible after flush")
        return saved

    def delete(self, producto: Producto) -> None:
        """Remove the product row. Its presentation is left untouched."""
        if producto.id is None:
            raise ValueError("Cannot delete a producto without id")
        row = self._get_row(producto.id)
        if row is None:
            return
        self._session.delete(row)
        self._session.flush()
        logger.info("Deleted producto {}", producto.id)

    def _advance_id_sequence(self) -> None:
        """Move the PostgreSQL id sequence past an explicitly inserted id.

        SQLite derives new ids from the current maximum and needs nothing.
        """
        if self._session.get_bind().dialect.name != "postgresql":
            return
        table = ProductoTable.__tablename__
        self._session.execute(
            text(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                f"GREATEST((SELECT MAX(id) FROM {table}), 1))"
            )
        )
        logger.debug("Advanced {} id sequence", table)
