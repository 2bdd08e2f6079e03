# krishi_jyothi/models/product.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Marketplace listing owned by a farmer.

    - farmer_id / farmer_name mirror the owning catalog identity.
    - listed=False hides the product from the marketplace without
      deleting it (dashboard "unlist").
    """

    __tablename__ = "products"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    farmer_id: int = Field(
        index=True,
        description="Identity id of the owning farmer",
    )

    farmer_name: str = Field(max_length=100)

    name: str = Field(
        max_length=100,
        index=True,
        description="Display name of the produce",
    )

    description: str | None = Field(default=None)

    category: str = Field(
        max_length=50,
        index=True,
        description="vegetables | fruits | grains | dairy | other",
    )

    price: float = Field(
        gt=0,
        description="Unit price (INR)",
    )

    unit: str = Field(
        default="kg",
        max_length=20,
        description="kg, bunch, dozen, box, ...",
    )

    stock: int = Field(
        default=0,
        ge=0,
        description="Units available",
    )

    organic: bool = Field(default=False, index=True)

    image: str = Field(
        default="/placeholder.svg?height=200&width=200",
        description="Image URL",
    )

    listed: bool = Field(
        default=True,
        index=True,
        description="Whether this product is visible in the marketplace",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
