# textile_shop/services/order_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from textile_shop.models.order import Order, OrderItem
from textile_shop.models.product import Product
from textile_shop.repositories.order_repo import OrderRepository
from textile_shop.repositories.product_repo import ProductRepository
from textile_shop.schemas.cart import CartState
from textile_shop.schemas.order import (
    OrderCreate,
    OrderItemRead,
    OrderRead,
    OrderStatusUpdate,
    OrderWithItemsRead,
)
from textile_shop.services.cart_ledger import CartLedger

logger = logging.getLogger(__name__)

# pending -> validated -> delivered, nothing goes back
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"validated"},
    "validated": {"delivered"},
    "delivered": set(),
}


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Create an order from the shopper's cart ledger
      - Re-check cart lines against current product stock
      - Deduct stock
      - Clear the ledger once the order is committed
      - Enforce status transitions (admin)
    """

    def __init__(self, order_repo: OrderRepository, product_repo: ProductRepository):
        self.order_repo = order_repo
        self.product_repo = product_repo

    # -------- User-facing operations --------

    def checkout(
        self,
        session: Session,
        user_id: uuid.UUID,
        ledger: CartLedger,
        payload: OrderCreate,
    ) -> OrderWithItemsRead:
        """
        Convert the shopper's cart into an Order.

        Steps:
          1. Snapshot items() and total(); error if empty.
          2. For each line: product must still exist with enough stock.
          3. Create Order (status='pending') and OrderItem rows.
          4. Deduct stock.
          5. Commit, then clear the ledger.

        The ledger is left as-is if anything fails before the commit.
        """
        if ledger.state is CartState.EMPTY:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cart is empty",
            )
        lines = ledger.items()
        total = ledger.total()

        errors: list[dict[str, str]] = []
        product_map: dict[str, Product] = {}

        for line in lines:
            product = self.product_repo.get_by_id(session, uuid.UUID(line.id))
            if not product:
                errors.append({"product_id": line.id, "reason": "Product not found"})
                continue
            if line.quantity > product.stock:
                errors.append(
                    {
                        "product_id": line.id,
                        "reason": f"Insufficient stock (have {product.stock}, requested {line.quantity})",
                    }
                )
                continue
            product_map[line.id] = product

        if errors:
            logger.warning("Checkout rejected for %s: %s", user_id, errors)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"message": "Cart validation failed", "items": errors},
            )

        order = Order(
            user_id=user_id,
            customer_name=payload.customer_name,
            delivery_address=payload.delivery_address,
            phone_number=payload.phone_number,
            payment_method=payload.payment_method,
            status="pending",
            total_amount=total,
        )
        order_items = [
            OrderItem(
                product_id=uuid.UUID(line.id),
                product_name=line.name,
                fabric_type=line.fabric_type,
                fabric_subtype=line.fabric_subtype,
                unit=line.unit,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for line in lines
        ]
        order, order_items = self.order_repo.add_with_items(session, order, order_items)

        for line in lines:
            product = product_map[line.id]
            product.stock -= line.quantity
            session.add(product)

        session.commit()
        session.refresh(order)
        ledger.clear()

        logger.info(
            "Order %s created for %s: %d lines, total %s",
            order.id,
            user_id,
            len(order_items),
            order.total_amount,
        )
        return self._build_order_with_items_dto(order, order_items)

    def _load(
        self,
        session: Session,
        order_id: uuid.UUID,
        owner_id: uuid.UUID | None = None,
    ) -> tuple[Order, list[OrderItem]]:
        """404 when the order is missing or, with owner_id, belongs to someone else."""
        found = self.order_repo.get_with_items(session, order_id)
        if found is None or (owner_id is not None and found[0].user_id != owner_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        return found

    def list_user_orders(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 50,
    ) -> list[OrderRead]:
        return self.order_repo.list_orders(session, user_id=user_id, skip=skip, limit=limit)  # type: ignore[return-value]

    def get_user_order(
        self,
        session: Session,
        user_id: uuid.UUID,
        order_id: uuid.UUID,
    ) -> OrderWithItemsRead:
        order, items = self._load(session, order_id, owner_id=user_id)
        return self._build_order_with_items_dto(order, items)

    # -------- Admin operations --------

    def list_all_orders(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        order_status: str | None = None,
    ) -> list[OrderRead]:
        return self.order_repo.list_orders(
            session, status=order_status, skip=skip, limit=limit
        )  # type: ignore[return-value]

    def get_order_admin(self, session: Session, order_id: uuid.UUID) -> OrderWithItemsRead:
        order, items = self._load(session, order_id)
        return self._build_order_with_items_dto(order, items)

    def update_status(
        self,
        session: Session,
        order_id: uuid.UUID,
        payload: OrderStatusUpdate,
    ) -> OrderRead:
        """
        Admin-only status update:

          pending   -> validated
          validated -> delivered
          delivered -> (no change)

        Setting the current status again is a no-op; anything else is 400.
        """
        order, _ = self._load(session, order_id)

        current = order.status
        new = payload.status

        if current == new:
            return order  # type: ignore[return-value]

        if new not in ALLOWED_TRANSITIONS.get(current, set()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid status transition: {current} -> {new}",
            )

        order.status = new
        session.add(order)
        session.commit()
        session.refresh(order)
        logger.info("Order %s moved %s -> %s", order.id, current, new)
        return order  # type: ignore[return-value]

    # -------- Helper DTO builder --------

    def _build_order_with_items_dto(
        self,
        order: Order,
        items: list[OrderItem],
    ) -> OrderWithItemsRead:
        item_dtos = [
            OrderItemRead(
                id=it.id,
                order_id=it.order_id,
                product_id=it.product_id,
                product_name=it.product_name,
                fabric_type=it.fabric_type,
                fabric_subtype=it.fabric_subtype,
                unit=it.unit,
                quantity=it.quantity,
                unit_price=it.unit_price,
                line_total=it.quantity * it.unit_price,
            )
            for it in items
        ]

        return OrderWithItemsRead(
            id=order.id,
            user_id=order.user_id,
            customer_name=order.customer_name,
            delivery_address=order.delivery_address,
            phone_number=order.phone_number,
            payment_method=order.payment_method,
            status=order.status,
            total_amount=order.total_amount,
            created_at=order.created_at,
            items=item_dtos,
        )
