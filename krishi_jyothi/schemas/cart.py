# krishi_jyothi/schemas/cart.py
from pydantic import ConfigDict
from sqlmodel import SQLModel, Field

from krishi_jyothi.core.notifications import Notification


class CartLineItem(SQLModel):
    """
    One product-and-quantity entry in the cart.

    A cart holds at most one line per product id.
    """

    id: int = Field(description="Product id")
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    unit: str
    image: str
    farmer_id: int
    farmer_name: str
    organic: bool = False

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class CartItemAdd(SQLModel):
    """
    Payload for adding to cart.

    The rest of the line is snapshotted from the product catalog.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: int
    quantity: int = Field(default=1, gt=0)


class CartQuantityUpdate(SQLModel):
    """
    Payload for setting a line's quantity.

    Zero or negative removes the line.
    """

    model_config = ConfigDict(extra="forbid")

    quantity: int


class CartSummary(SQLModel):
    """
    Full cart response model with derived totals.
    """

    items: list[CartLineItem]
    item_count: int
    subtotal: float
    notifications: list[Notification] = []
