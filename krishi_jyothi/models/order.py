# krishi_jyothi/models/order.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Order placed at checkout.

    Totals are computed from the cart at checkout time and stored;
    they are not recomputed later.
    """

    __tablename__ = "orders"

    id: int | None = Field(default=None, primary_key=True)

    identity_id: int = Field(
        index=True,
        description="Catalog id of the customer",
    )

    customer_name: str = Field(max_length=100)

    total: float = Field(ge=0)

    status: str = Field(
        default="Processing",
        index=True,
        description="Processing | Delivered | Cancelled",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class OrderItem(SQLModel, table=True):
    """
    Snapshot of one cart line inside an Order.
    """

    __tablename__ = "order_items"

    id: int | None = Field(default=None, primary_key=True)

    order_id: int = Field(foreign_key="orders.id", index=True)

    product_id: int = Field(index=True)

    farmer_id: int = Field(index=True)

    name: str

    unit: str

    price: float = Field(ge=0)

    quantity: int = Field(gt=0)

    line_total: float = Field(ge=0)
