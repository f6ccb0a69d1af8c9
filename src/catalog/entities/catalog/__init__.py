"""Catalog entities: products and their presentations.

Each entity has its own package containing:
- entity.py: Domain model with validation
- table.py: Database persistence model
- repository.py: Data access layer (where the core exposes one)
"""

from .presentacion import Presentacion, PresentacionTable
from .producto import Producto, ProductoRepository, ProductoTable

__all__ = [
    "Presentacion",
    "PresentacionTable",
    "Producto",
    "ProductoRepository",
    "ProductoTable",
]
