# textile_shop/models/product.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Fabric product sold on the storefront.

    fabric_type / fabric_subtype / unit are checked against the fabric
    catalog by the service layer before a row is written.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=100,
        index=True,
        description="Display name of the fabric",
    )

    description: str = Field(
        default="",
        description="Long description shown on the product page",
    )

    price: Decimal = Field(
        gt=0,
        max_digits=10,
        decimal_places=2,
        description="Price for one unit of measure",
    )

    stock: Decimal = Field(
        default=Decimal(0),
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Available quantity, in `unit`",
    )

    fabric_type: str = Field(index=True, description="Fabric catalog key")
    fabric_subtype: str | None = Field(default=None)
    unit: str = Field(description="meter | roll")

    # Public URLs of already-uploaded images (upload handled by the platform)
    images: list[str] = Field(default_factory=list, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
