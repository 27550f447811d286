# textile_shop/services/cart_ledger.py
from decimal import Decimal, InvalidOperation

from textile_shop.core.exceptions import InvalidLineItem, InvalidQuantity, ItemNotFound
from textile_shop.schemas.cart import CartLineItem, CartState
from textile_shop.services.fabric_catalog import FABRIC_CATALOG, FabricCatalog

MIN_QUANTITY = Decimal(1)
ZERO = Decimal("0.00")


def _as_decimal(value: object) -> Decimal | None:
    """
    Coerce a price/quantity input to Decimal, or None if it is not a number.

    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, (float, str)):
        try:
            return Decimal(str(value).strip())
        except InvalidOperation:
            return None
    return None


def _valid_quantity(value: object) -> Decimal | None:
    quantity = _as_decimal(value)
    if quantity is None or not quantity.is_finite() or quantity < MIN_QUANTITY:
        return None
    return quantity


class CartLedger:
    """
    In-memory cart for one shopper session.

    Responsibilities:
      - validate line items against the fabric catalog before storing them
      - keep one line per product id, in insertion order
      - compute totals fresh from the current lines

    Every mutating call validates first and only then touches state, so a
    failed call leaves the ledger exactly as it was.

    Not thread-safe: share a ledger across requests only through
    `CartSessionStore.locked`.
    """

    def __init__(self, catalog: FabricCatalog = FABRIC_CATALOG):
        self.catalog = catalog
        self._items: dict[str, CartLineItem] = {}

    # ---- internal helpers ----

    def _validate(self, candidate: CartLineItem) -> dict[str, str]:
        reasons: dict[str, str] = {}

        if not candidate.id:
            reasons["id"] = "product id is required"

        price = _as_decimal(candidate.unit_price)
        if price is None or not price.is_finite() or price <= 0:
            reasons["unit_price"] = "must be a positive amount"

        if _valid_quantity(candidate.quantity) is None:
            reasons["quantity"] = f"must be a finite number >= {MIN_QUANTITY}"

        if not self.catalog.is_valid_type(candidate.fabric_type):
            reasons["fabric_type"] = f"unknown fabric type {candidate.fabric_type!r}"
            return reasons

        if not self.catalog.is_valid_subtype(
            candidate.fabric_type, candidate.fabric_subtype
        ):
            reasons["fabric_subtype"] = (
                f"{candidate.fabric_subtype!r} is not a subtype of "
                f"{candidate.fabric_type!r}"
            )

        if not self.catalog.is_valid_unit(candidate.fabric_type, candidate.unit):
            allowed = ", ".join(self.catalog.units_for(candidate.fabric_type))
            reasons["unit"] = f"{candidate.unit!r} not allowed (expected one of {allowed})"

        return reasons

    # ---- public operations ----

    def add_item(self, candidate: CartLineItem) -> CartLineItem:
        """
        Add a line, or replace the existing line for the same product.

        On replace the candidate's quantity wins (it is not summed) and the
        line keeps its original position.

        Raises:
            InvalidLineItem: with every failing field, ledger unchanged.
        """
        reasons = self._validate(candidate)
        if reasons:
            raise InvalidLineItem(reasons)

        # dict assignment keeps the position of an existing key
        self._items[candidate.id] = candidate
        return candidate

    def update_quantity(self, product_id: str, new_quantity: object) -> CartLineItem:
        """
        Raises:
            ItemNotFound: product_id is not in the cart.
            InvalidQuantity: new_quantity is not a finite number >= 1.
        """
        item = self._items.get(product_id)
        if item is None:
            raise ItemNotFound(product_id)

        quantity = _valid_quantity(new_quantity)
        if quantity is None:
            raise InvalidQuantity(new_quantity)

        updated = item.model_copy(update={"quantity": quantity})
        self._items[product_id] = updated
        return updated

    def remove_item(self, product_id: str) -> bool:
        """Remove a line if present. Returns whether anything was removed."""
        return self._items.pop(product_id, None) is not None

    def clear(self) -> None:
        self._items.clear()

    def get_item(self, product_id: str) -> CartLineItem:
        item = self._items.get(product_id)
        if item is None:
            raise ItemNotFound(product_id)
        return item

    # ---- read-only projections ----

    def total(self) -> Decimal:
        return sum((it.line_total for it in self._items.values()), ZERO)

    def line_count(self) -> int:
        return len(self._items)

    def items(self) -> tuple[CartLineItem, ...]:
        """
        Snapshot of the current lines in insertion order.

        Lines are immutable, so later cart changes never show up in a
        snapshot that was already taken.
        """
        return tuple(self._items.values())

    @property
    def state(self) -> CartState:
        return CartState.NON_EMPTY if self._items else CartState.EMPTY

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._items
