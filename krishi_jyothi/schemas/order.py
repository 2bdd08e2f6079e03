# krishi_jyothi/schemas/order.py
from datetime import datetime

from sqlmodel import SQLModel

from krishi_jyothi.core.notifications import Notification


class OrderItemRead(SQLModel):
    product_id: int
    farmer_id: int
    name: str
    unit: str
    price: float
    quantity: int
    line_total: float


class OrderRead(SQLModel):
    id: int
    identity_id: int
    customer_name: str
    total: float
    status: str
    created_at: datetime
    items: list[OrderItemRead]


class CheckoutResult(SQLModel):
    order: OrderRead
    notifications: list[Notification] = []
