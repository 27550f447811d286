# textile_shop/routers/orders.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from textile_shop.core.auth import require_client, require_admin
from textile_shop.database import get_session
from textile_shop.models.profile import Profile
from textile_shop.repositories.order_repo import OrderRepository
from textile_shop.repositories.product_repo import ProductRepository
from textile_shop.routers.cart import get_cart_store
from textile_shop.schemas.order import (
    OrderCreate,
    OrderRead,
    OrderStatus,
    OrderWithItemsRead,
    OrderStatusUpdate,
)
from textile_shop.services.cart_sessions import CartSessionStore
from textile_shop.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
product_repo = ProductRepository()
service = OrderService(order_repo, product_repo)


# -------- User-facing endpoints --------


@router.post("/checkout", response_model=OrderWithItemsRead)
def checkout(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    store: CartSessionStore = Depends(get_cart_store),
    current: Profile = Depends(require_client),
):
    """
    Create an order from the current shopper's cart.

    The cart is emptied only once the order is stored.
    """
    with store.locked(current.id) as ledger:
        return service.checkout(session, current.id, ledger, payload)


@router.get("/me", response_model=list[OrderRead])
def list_my_orders(
    session: Session = Depends(get_session),
    current: Profile = Depends(require_client),
    skip: int = 0,
    limit: int = 50,
):
    return service.list_user_orders(session, current.id, skip, limit)


@router.get("/me/{order_id}", response_model=OrderWithItemsRead)
def get_my_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_client),
):
    return service.get_user_order(session, current.id, order_id)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=list[OrderRead],
    dependencies=[Depends(require_admin)],
)
def list_all_orders(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
    status: OrderStatus | None = None,
):
    """
    List all orders (admin only), optionally filtered by status.
    """
    return service.list_all_orders(session, skip, limit, order_status=status)


@router.get(
    "/{order_id}",
    response_model=OrderWithItemsRead,
    dependencies=[Depends(require_admin)],
)
def get_order_admin(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_order_admin(session, order_id)


@router.patch(
    "/{order_id}/status",
    response_model=OrderRead,
    dependencies=[Depends(require_admin)],
)
def update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
):
    """
    Update order status (admin only).

      pending   -> validated

      validated -> delivered

      delivered -> (no change)
    """
    return service.update_status(session, order_id, payload)
