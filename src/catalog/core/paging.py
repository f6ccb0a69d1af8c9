"""Sort and pagination value types shared by repositories and routers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")

# Offsets and limits are bound as signed 64-bit SQL integers
MAX_ROW_NUMBER = 2**63 - 1


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Order:
    """A single ``(field, direction)`` sort criterion."""

    name: str
    direction: Direction = Direction.ASC


@dataclass(frozen=True)
class Sort:
    """Ordered sequence of sort criteria, applied left to right."""

    orders: tuple[Order, ...] = ()

    @classmethod
    def by(cls, *fields: str, direction: Direction = Direction.ASC) -> Sort:
        """Build a sort over ``fields`` sharing the same direction."""
        return cls(tuple(Order(name, direction) for name in fields))

    def __iter__(self):
        return iter(self.orders)


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index, positive page size and the sort to page over."""

    page: int
    size: int
    sort: Sort = field(default_factory=Sort)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("El índice de página no puede ser negativo")
        if self.size < 1:
            raise ValueError("El tamaño de página debe ser mayor que cero")
        if self.size > MAX_ROW_NUMBER:
            raise ValueError("El tamaño de página está fuera de rango")
        if self.offset > MAX_ROW_NUMBER:
            raise ValueError("El índice de página está fuera de rango")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the exact total across all pages."""

    items: list[T]
    total: int
    request: PageRequest

