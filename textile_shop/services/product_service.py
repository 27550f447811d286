# textile_shop/services/product_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from textile_shop.models.product import Product
from textile_shop.repositories.product_repo import ProductRepository
from textile_shop.schemas.product import ProductCreate, ProductUpdate
from textile_shop.services.fabric_catalog import FABRIC_CATALOG, FabricCatalog

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for products.

    Responsibilities:
      - keep fabric_type / fabric_subtype / unit consistent with the catalog
      - default the unit to the fabric type's default unit
      - admin-only operations (enforced at router via require_admin)
    """

    def __init__(self, repo: ProductRepository, catalog: FabricCatalog = FABRIC_CATALOG):
        self.repo = repo
        self.catalog = catalog

    # ----- Helpers -----

    def _resolve_fabric(
        self,
        fabric_type: str,
        fabric_subtype: str | None,
        unit: str | None,
    ) -> tuple[str, str | None, str]:
        """
        Validate a fabric combination and fill in the default unit.

        Subtype may be left empty for a product covering the whole type.
        """
        errors: dict[str, str] = {}

        if not self.catalog.is_valid_type(fabric_type):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"fabric_type": f"Unknown fabric type {fabric_type!r}"},
            )

        if fabric_subtype is not None and not self.catalog.is_valid_subtype(
            fabric_type, fabric_subtype
        ):
            errors["fabric_subtype"] = (
                f"Allowed: {', '.join(self.catalog.subtypes_for(fabric_type))}"
            )

        if unit is None:
            unit = self.catalog.default_unit_for(fabric_type)
        elif not self.catalog.is_valid_unit(fabric_type, unit):
            errors["unit"] = f"Allowed: {', '.join(self.catalog.units_for(fabric_type))}"

        if errors:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=errors,
            )
        return fabric_type, fabric_subtype, unit

    # ----- Products -----

    def list_products(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        search: str | None = None,
        fabric_type: str | None = None,
    ) -> list[Product]:
        search = search.strip() if search else None
        return self.repo.list_products(
            session, skip=skip, limit=limit, search=search, fabric_type=fabric_type
        )

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def create_product(self, session: Session, payload: ProductCreate) -> Product:
        fabric_type, fabric_subtype, unit = self._resolve_fabric(
            payload.fabric_type, payload.fabric_subtype, payload.unit
        )
        product = Product(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            stock=payload.stock,
            fabric_type=fabric_type,
            fabric_subtype=fabric_subtype,
            unit=unit,
            images=list(payload.images),
        )
        return self.repo.create(session, product)

    def update_product(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: ProductUpdate,
    ) -> Product:
        """
        Partial update of a product.

        Changing the fabric type re-validates subtype and unit against the
        new type; a unit that no longer fits falls back to the default.
        """
        product = self.get_product(session, product_id)
        changes = payload.model_dump(exclude_unset=True)

        if {"fabric_type", "fabric_subtype", "unit"} & changes.keys():
            fabric_type = changes.get("fabric_type") or product.fabric_type
            type_changed = fabric_type != product.fabric_type
            subtype = changes.get(
                "fabric_subtype", None if type_changed else product.fabric_subtype
            )
            unit = changes.get("unit")
            if unit is None:
                unit = product.unit
                if type_changed and not self.catalog.is_valid_unit(fabric_type, unit):
                    unit = None
            (
                product.fabric_type,
                product.fabric_subtype,
                product.unit,
            ) = self._resolve_fabric(fabric_type, subtype, unit)

        for field in ("name", "description", "price", "stock", "images"):
            if changes.get(field) is not None:
                setattr(product, field, changes[field])

        return self.repo.update(session, product)

    def delete_product(self, session: Session, product_id: uuid.UUID) -> None:
        product = self.get_product(session, product_id)
        name = product.name
        self.repo.delete(session, product)
        logger.info("Deleted product %s (%s)", product_id, name)
