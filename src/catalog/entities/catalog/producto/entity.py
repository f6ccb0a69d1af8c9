"""Entity: Producto."""

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_core import PydanticCustomError

from src.catalog.entities._base import Entity
from src.catalog.entities.catalog.presentacion.entity import Presentacion

NOMBRE_MAX_LENGTH = 100
DESCRIPCION_MAX_LENGTH = 255


class Producto(Entity):
    """Catalog product.

    Validation constraints live here as field validators; the HTTP layer only
    forwards their messages. ``imagen_producto`` is serialized as
    ``imagenProducto`` and holds ``{fileCode}-{originalName}`` when an image
    was uploaded with the product.
    """

    nombre: str = Field(description="Product name")
    descripcion: str | None = Field(default=None, description="Product description")
    precio: float | None = Field(default=None, description="Unit price")
    stock: int | None = Field(default=None, description="Units in stock")
    imagen_producto: str | None = Field(
        default=None,
        validation_alias=AliasChoices("imagenProducto", "imagen_producto"),
        serialization_alias="imagenProducto",
        description="Stored image name, {fileCode}-{originalName}",
    )
    presentacion: Presentacion | None = Field(
        default=None, description="Presentation this product is sold in"
    )

    @field_validator("nombre")
    @classmethod
    def _validate_nombre(cls, value: str) -> str:
        if not value or not value.strip():
            raise PydanticCustomError(
                "nombre_vacio", "El nombre del producto no puede estar vacío"
            )
        if len(value) > NOMBRE_MAX_LENGTH:
            raise PydanticCustomError(
                "nombre_demasiado_largo",
                "El nombre del producto no puede superar los {max_length} caracteres",
                {"max_length": NOMBRE_MAX_LENGTH},
            )
        return value

    @field_validator("descripcion")
    @classmethod
    def _validate_descripcion(cls, value: str | None) -> str | None:
        if value is not None and len(value) > DESCRIPCION_MAX_LENGTH:
            raise PydanticCustomError(
                "descripcion_demasiado_larga",
                "La descripción no puede superar los {max_length} caracteres",
                {"max_length": DESCRIPCION_MAX_LENGTH},
            )
        return value

    @field_validator("precio")
    @classmethod
    def _validate_precio(cls, value: float | None) -> float | None:
        if value is not None and value < 0:
            raise PydanticCustomError("precio_negativo", "El precio no puede ser negativo")
        return value

    @field_validator("stock")
    @classmethod
    def _validate_stock(cls, value: int | None) -> int | None:
        if value is not None and value < 0:
            raise PydanticCustomError("stock_negativo", "El stock no puede ser negativo")
        return value

    @property
    def presentacion_id(self) -> int | None:
        return self.presentacion.id if self.presentacion is not None else None

    def __eq__(self, other: Any) -> bool:
        """Compare products by their observable attributes."""
        if not isinstance(other, Producto):
            return False

        return (
            self.id == other.id
            and self.nombre == other.nombre
            and self.descripcion == other.descripcion
            and self.precio == other.precio
            and self.stock == other.stock
            and self.imagen_producto == other.imagen_producto
            and self.presentacion_id == other.presentacion_id
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.nombre,
            self.descripcion,
            self.precio,
            self.stock,
            self.imagen_producto,
            self.presentacion_id,
        ))
