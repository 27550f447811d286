# textile_shop/schemas/catalog.py
from typing import Literal

from pydantic import BaseModel, ConfigDict

FabricUnit = Literal["meter", "roll"]

FABRIC_UNITS: frozenset[str] = frozenset({"meter", "roll"})


class FabricTypeDefinition(BaseModel):
    """
    One entry of the fabric taxonomy.

    Immutable once built; consistency across entries is checked by
    `FabricCatalog` when the registry is assembled.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    display_name: str
    subtypes: tuple[str, ...]
    units: tuple[FabricUnit, ...]
    default_unit: FabricUnit


class FabricCatalogRead(BaseModel):
    """
    Response model for the catalog endpoint.
    """

    currency: str
    fabrics: list[FabricTypeDefinition]
