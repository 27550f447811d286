# textile_shop/schemas/order.py
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

PaymentMethod = Literal["online", "onplace"]
OrderStatus = Literal["pending", "validated", "delivered"]


class OrderCreate(SQLModel):
    """
    Payload for creating an order from the current cart.

    Backend derives:
      - user_id from token
      - status = 'pending'
      - items and total_amount from the cart
    """

    model_config = ConfigDict(extra="forbid")

    customer_name: str
    delivery_address: str
    phone_number: str
    payment_method: PaymentMethod

    @field_validator("customer_name", "delivery_address", "phone_number")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class OrderRead(SQLModel):
    """
    Lightweight representation of an order (without items).
    """

    id: uuid.UUID
    user_id: uuid.UUID
    customer_name: str
    delivery_address: str
    phone_number: str
    payment_method: PaymentMethod
    status: OrderStatus
    total_amount: Decimal
    created_at: datetime


class OrderItemRead(SQLModel):
    id: uuid.UUID
    order_id: uuid.UUID
    product_id: uuid.UUID
    product_name: str
    fabric_type: str
    fabric_subtype: str
    unit: str
    quantity: Decimal
    unit_price: Decimal
    line_total: Decimal


class OrderWithItemsRead(OrderRead):
    """
    Full order view including items.
    """

    items: list[OrderItemRead]


class OrderStatusUpdate(SQLModel):
    """
    Admin payload to change order status.
    """

    model_config = ConfigDict(extra="forbid")

    status: OrderStatus
