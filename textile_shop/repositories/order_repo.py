# textile_shop/repositories/order_repo.py
import uuid

from sqlmodel import Session, select

from textile_shop.models.order import Order, OrderItem


class OrderRepository:
    """
    Orders are always written together with their lines and nothing here
    commits: checkout also deducts stock, and the service commits once.
    """

    def list_orders(
        self,
        session: Session,
        *,
        user_id: uuid.UUID | None = None,
        status: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        """Newest first; filter by shopper (order tracking) or by status (back office)."""
        stmt = select(Order)
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        if status:
            stmt = stmt.where(Order.status == status)
        stmt = stmt.order_by(Order.created_at.desc()).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def get_with_items(
        self, session: Session, order_id: uuid.UUID
    ) -> tuple[Order, list[OrderItem]] | None:
        order = session.get(Order, order_id)
        if order is None:
            return None
        items = session.exec(select(OrderItem).where(OrderItem.order_id == order_id)).all()
        return order, list(items)

    def add_with_items(
        self,
        session: Session,
        order: Order,
        items: list[OrderItem],
    ) -> tuple[Order, list[OrderItem]]:
        """Stage an order and its lines; ids are assigned, nothing is committed."""
        session.add(order)
        session.flush()
        for item in items:
            item.order_id = order.id
        session.add_all(items)
        session.flush()
        return order, items
