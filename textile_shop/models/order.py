# textile_shop/models/order.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order created from a cart at checkout.
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="profiles.id",
        index=True,
    )

    customer_name: str = Field(description="Name given at checkout")
    delivery_address: str = Field(description="Full delivery address")
    phone_number: str = Field(description="Contact phone number for delivery")

    # online | onplace
    payment_method: str = Field(description="Payment method chosen at checkout")

    # pending | validated | delivered
    status: str = Field(
        default="pending",
        index=True,
        description="Order status",
    )

    total_amount: Decimal = Field(
        max_digits=12,
        decimal_places=2,
        description="Sum of line totals at checkout",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )


class OrderItem(SQLModel, table=True):
    """
    Line item inside an order, snapshotted from the cart line.
    """

    __tablename__ = "order_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    order_id: uuid.UUID = Field(
        foreign_key="orders.id",
        index=True,
    )

    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        index=True,
    )

    product_name: str = Field(default="")
    fabric_type: str
    fabric_subtype: str
    unit: str

    quantity: Decimal = Field(
        ge=1,
        max_digits=10,
        decimal_places=2,
        description="Quantity ordered, in `unit`",
    )

    unit_price: Decimal = Field(
        max_digits=10,
        decimal_places=2,
        description="Unit price at time of order",
    )
