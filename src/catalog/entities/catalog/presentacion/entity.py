"""Entity: Presentacion."""

from pydantic import Field

from src.catalog.entities._base import Entity


class Presentacion(Entity):
    """Packaging or unit descriptor a product may be sold in (box, kg, litre...).

    Presentations exist independently of products; a product references at
    most one of them.
    """

    nombre: str | None = Field(default=None, description="Presentation name")
    descripcion: str | None = Field(default=None, description="Presentation description")
