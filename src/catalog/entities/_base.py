from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

# Identifiers are stored as signed 64-bit integers
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1


class Entity(BaseModel):
    """Base entity class carrying the store-assigned integer identifier."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = PydanticField(
        default=None,
        ge=ID_MIN,
        le=ID_MAX,
        description="Identifier assigned by the store on first insert",
    )


class EntityTable(SQLModel, table=False):
    """Base table class with an autoincrement integer primary key."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Identifier assigned by the store on first insert",
    )
