"""Presentacion database table model."""

from src.catalog.entities._base import EntityTable


class PresentacionTable(EntityTable, table=True):
    """Database persistence model for presentations."""

    __tablename__ = "presentacion"

    nombre: str
    descripcion: str | None = None
