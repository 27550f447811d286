# textile_shop/services/cart_service.py
import uuid
from decimal import Decimal

from fastapi import HTTPException, status
from sqlmodel import Session

from textile_shop.core.exceptions import InvalidLineItem
from textile_shop.models.product import Product
from textile_shop.repositories.product_repo import ProductRepository
from textile_shop.schemas.cart import (
    CartItemCreate,
    CartItemUpdate,
    CartLineItem,
    CartSummary,
)
from textile_shop.services.cart_ledger import CartLedger


class CartService:
    """
    Glue between the product table and a shopper's `CartLedger`.

    Responsibilities:
      - resolve the product and its current price
      - enforce quantity <= stock before touching the ledger
      - build cart line items from product data
      - shape ledger state into CartSummary

    Callers pass a ledger they already hold the session lock for.
    """

    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    # ---- internal helpers ----

    def _get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.product_repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    @staticmethod
    def _ensure_stock(product: Product, quantity: Decimal) -> None:
        if quantity.is_finite() and quantity > product.stock:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Not enough stock available (have {product.stock} {product.unit})",
            )

    @staticmethod
    def _line_fabric(product: Product, payload: CartItemCreate) -> tuple[str, str]:
        """
        Subtype and unit for a new cart line.

        The product's price and stock are counted in `product.unit`, so the
        line always uses it. A product listed under one subtype keeps it; a
        shopper only picks the subtype of a product listed for the whole type.
        """
        reasons: dict[str, str] = {}

        if payload.unit is not None and payload.unit != product.unit:
            reasons["unit"] = f"{product.name} is sold by the {product.unit}"

        subtype = product.fabric_subtype or payload.fabric_subtype or ""
        if (
            product.fabric_subtype
            and payload.fabric_subtype is not None
            and payload.fabric_subtype != product.fabric_subtype
        ):
            reasons["fabric_subtype"] = (
                f"{product.name} is only available as {product.fabric_subtype!r}"
            )

        if reasons:
            raise InvalidLineItem(reasons)
        return subtype, product.unit

    # ---- public operations ----

    @staticmethod
    def summarize(ledger: CartLedger) -> CartSummary:
        return CartSummary(
            items=list(ledger.items()),
            line_count=ledger.line_count(),
            total=ledger.total(),
            state=ledger.state,
        )

    def add_to_cart(
        self,
        session: Session,
        ledger: CartLedger,
        payload: CartItemCreate,
    ) -> CartSummary:
        """
        Add a product to the cart, or replace the quantity of an existing line.

        Rules:
          - product must exist
          - quantity <= stock
          - unit_price is taken from the current product price
          - the line is always in the product's unit
          - the product's subtype wins when it has one
        """
        product = self._get_product(session, payload.product_id)
        subtype, unit = self._line_fabric(product, payload)
        self._ensure_stock(product, payload.quantity)

        item = CartLineItem(
            id=str(product.id),
            name=product.name,
            unit_price=product.price,
            quantity=payload.quantity,
            fabric_type=product.fabric_type,
            fabric_subtype=subtype,
            unit=unit,
        )
        ledger.add_item(item)
        return self.summarize(ledger)

    def update_quantity(
        self,
        session: Session,
        ledger: CartLedger,
        product_id: uuid.UUID,
        payload: CartItemUpdate,
    ) -> CartSummary:
        key = str(product_id)
        ledger.get_item(key)

        product = self.product_repo.get_by_id(session, product_id)
        if product is not None:
            self._ensure_stock(product, payload.quantity)

        ledger.update_quantity(key, payload.quantity)
        return self.summarize(ledger)

    def remove_item(self, ledger: CartLedger, product_id: uuid.UUID) -> CartSummary:
        """
        Remove a product from the cart. Removing an absent product is a no-op.
        """
        ledger.remove_item(str(product_id))
        return self.summarize(ledger)

    def clear_cart(self, ledger: CartLedger) -> CartSummary:
        ledger.clear()
        return self.summarize(ledger)
