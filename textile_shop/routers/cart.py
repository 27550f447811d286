# textile_shop/routers/cart.py
import uuid

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from textile_shop.core.auth import require_client
from textile_shop.database import get_session
from textile_shop.models.profile import Profile
from textile_shop.repositories.product_repo import ProductRepository
from textile_shop.schemas.cart import CartSummary, CartItemCreate, CartItemUpdate
from textile_shop.services.cart_service import CartService
from textile_shop.services.cart_sessions import CartSessionStore

router = APIRouter(prefix="/cart", tags=["Cart"])

product_repo = ProductRepository()
service = CartService(product_repo)


def get_cart_store(request: Request) -> CartSessionStore:
    """
    The per-app session store, created in the lifespan of `main.app`.
    """
    return request.app.state.cart_sessions


@router.get("", response_model=CartSummary)
def get_my_cart(
    store: CartSessionStore = Depends(get_cart_store),
    current: Profile = Depends(require_client),
):
    """
    Current shopper's cart: lines with line totals, line count and total.
    """
    with store.locked(current.id) as ledger:
        return service.summarize(ledger)


@router.post("", response_model=CartSummary)
def add_to_cart(
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    store: CartSessionStore = Depends(get_cart_store),
    current: Profile = Depends(require_client),
):
    """
    Add a product to the cart.

    Adding a product already in the cart replaces its quantity.
    """
    with store.locked(current.id) as ledger:
        return service.add_to_cart(session, ledger, payload)


@router.patch("/{product_id}", response_model=CartSummary)
def update_cart_item(
    product_id: uuid.UUID,
    payload: CartItemUpdate,
    session: Session = Depends(get_session),
    store: CartSessionStore = Depends(get_cart_store),
    current: Profile = Depends(require_client),
):
    with store.locked(current.id) as ledger:
        return service.update_quantity(session, ledger, product_id, payload)


@router.delete("/{product_id}", response_model=CartSummary)
def remove_cart_item(
    product_id: uuid.UUID,
    store: CartSessionStore = Depends(get_cart_store),
    current: Profile = Depends(require_client),
):
    """
    Remove a product from the cart. Safe to retry.
    """
    with store.locked(current.id) as ledger:
        return service.remove_item(ledger, product_id)


@router.delete("", response_model=CartSummary)
def clear_cart(
    store: CartSessionStore = Depends(get_cart_store),
    current: Profile = Depends(require_client),
):
    with store.locked(current.id) as ledger:
        return service.clear_cart(ledger)
