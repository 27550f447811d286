# textile_shop/schemas/cart.py
import enum
import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, computed_field, field_validator
from sqlmodel import SQLModel, Field

from textile_shop.schemas.catalog import FabricUnit


class CartState(str, enum.Enum):
    EMPTY = "empty"
    NON_EMPTY = "non_empty"


class CartLineItem(BaseModel):
    """
    One product entry held by a `CartLedger`.

    Field-level rules (positive price, quantity >= 1, fabric metadata known
    to the catalog) are enforced by `CartLedger.add_item`, so an instance on
    its own may still be invalid.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    unit_price: Decimal
    quantity: Decimal
    fabric_type: str
    fabric_subtype: str
    unit: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class CartItemCreate(SQLModel):
    """
    Payload for adding a product to the cart.

    Unit must match the product's unit when given. Subtype is only chosen
    by the shopper for products listed without one.
    """

    product_id: uuid.UUID
    quantity: Decimal = Field(ge=1, max_digits=10, decimal_places=2)
    fabric_subtype: str | None = None
    unit: FabricUnit | None = None

    @field_validator("fabric_subtype")
    @classmethod
    def normalize_subtype(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class CartItemUpdate(SQLModel):
    """
    Payload for updating quantity of a cart item.
    """

    quantity: Decimal


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    items: list[CartLineItem]
    line_count: int
    total: Decimal
    state: CartState
