"""Response envelopes, one model per response shape."""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.catalog.entities.catalog.producto import Producto


class Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_content(self) -> dict:
        """JSON-ready body using the wire names."""
        return self.model_dump(mode="json", by_alias=True)


class ProductoEnvelope(Envelope):
    """Successful read or write of a single product."""

    mensaje: str
    producto: Producto


class ErrorEnvelope(Envelope):
    """Lookup miss or lookup failure."""

    error: str


class ValidationErrorEnvelope(Envelope):
    """One message per failed constraint, in binder order."""

    errores: list[str]


class InfraErrorEnvelope(Envelope):
    """Persistence or I/O failure, with the most specific cause embedded."""

    error_grave: str = Field(serialization_alias="errorGrave")


def validation_messages(errors: Iterable[Mapping[str, Any]]) -> list[str]:
    """Project pydantic error dicts onto their messages, keeping their order."""
    return [str(error["msg"]) for error in errors]
