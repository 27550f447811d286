# textile_shop/schemas/product.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from textile_shop.schemas.catalog import FabricUnit


class ProductCreate(SQLModel):
    """
    Payload for creating a product.

    - unit is optional: if omitted, the fabric type's default unit is used.
    - fabric_type / fabric_subtype / unit are checked against the catalog
      by ProductService.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    description: str = ""
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    stock: Decimal = Field(default=Decimal(0), ge=0, max_digits=10, decimal_places=2)
    fabric_type: str
    fabric_subtype: str | None = None
    unit: FabricUnit | None = None
    images: list[str] = []

    @field_validator("name", "fabric_type")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("fabric_subtype")
    @classmethod
    def normalize_subtype(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    id: uuid.UUID
    name: str
    description: str
    price: Decimal
    stock: Decimal
    fabric_type: str
    fabric_subtype: str | None
    unit: FabricUnit
    images: list[str]
    created_at: datetime


class ProductUpdate(SQLModel):
    """
    Partial update payload for products.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    description: str | None = None
    price: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    stock: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    fabric_type: str | None = None
    fabric_subtype: str | None = None
    unit: FabricUnit | None = None
    images: list[str] | None = None

    @field_validator("name", "fabric_type")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v
