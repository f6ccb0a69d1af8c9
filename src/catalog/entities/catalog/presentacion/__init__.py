"""Entity package: Presentacion."""

from .entity import Presentacion
from .table import PresentacionTable

__all__ = ["Presentacion", "PresentacionTable"]
