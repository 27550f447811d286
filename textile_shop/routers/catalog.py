# textile_shop/routers/catalog.py
from fastapi import APIRouter

from textile_shop.core.config import get_settings
from textile_shop.schemas.catalog import FabricCatalogRead, FabricTypeDefinition
from textile_shop.services.fabric_catalog import FABRIC_CATALOG

router = APIRouter(prefix="/catalog", tags=["Catalog"])

settings = get_settings()


@router.get("/fabrics", response_model=FabricCatalogRead)
def list_fabrics():
    """
    All fabric types with their subtypes and units, in display order.

    Public endpoint, used to fill the type/subtype/unit selectors.
    """
    return FabricCatalogRead(
        currency=settings.CURRENCY,
        fabrics=list(FABRIC_CATALOG.definitions()),
    )


@router.get("/fabrics/{type_key}", response_model=FabricTypeDefinition)
def get_fabric(type_key: str):
    """
    One fabric type. Unknown keys return 404.
    """
    return FABRIC_CATALOG.get_definition(type_key)
