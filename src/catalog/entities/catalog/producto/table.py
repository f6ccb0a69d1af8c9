"""Producto database table model."""

from typing import Optional

from sqlmodel import Field, Relationship

from src.catalog.entities._base import EntityTable
from src.catalog.entities.catalog.presentacion.table import PresentacionTable
from src.catalog.entities.catalog.producto.entity import Producto


class ProductoTable(EntityTable, table=True):
    """Database persistence model for products.

    The presentation association is lazy; every read the repository exposes
    fetches it explicitly with a left outer join.
    """

    __tablename__ = "producto"

    nombre: str = Field(index=True)
    descripcion: str | None = None
    precio: float | None = None
    stock: int | None = None
    imagen_producto: str | None = None
    presentacion_id: int | None = Field(
        default=None, foreign_key="presentacion.id", nullable=True, index=True
    )

    presentacion: Optional[PresentacionTable] = Relationship(
        sa_relationship_kwargs={"lazy": "select"}
    )

    @classmethod
    def from_entity(cls, producto: Producto) -> "ProductoTable":
        """Build a detached row carrying every column of ``producto``."""
        return cls(
            id=producto.id,
            nombre=producto.nombre,
            descripcion=producto.descripcion,
            precio=producto.precio,
            stock=producto.stock,
            imagen_producto=producto.imagen_producto,
            presentacion_id=producto.presentacion_id,
        )
