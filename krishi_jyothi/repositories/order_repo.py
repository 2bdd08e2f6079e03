# krishi_jyothi/repositories/order_repo.py
from sqlalchemy import func
from sqlmodel import Session, col, select

from krishi_jyothi.models.order import Order, OrderItem


class OrderRepository:

    def list_items(self, session: Session, order_id: int) -> list[OrderItem]:
        stmt = select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        return session.exec(stmt).all()

    def create_with_items(
        self,
        session: Session,
        order: Order,
        items: list[OrderItem],
    ) -> Order:
        """
        Insert the order and its items in one transaction.
        """
        session.add(order)
        session.flush()  # assigns order.id

        for item in items:
            item.order_id = order.id
            session.add(item)

        session.commit()
        session.refresh(order)
        return order

    # Farmer dashboard aggregates

    def sales_total_for_farmer(self, session: Session, farmer_id: int) -> float:
        stmt = select(func.coalesce(func.sum(OrderItem.line_total), 0.0)).where(
            OrderItem.farmer_id == farmer_id
        )
        return float(session.exec(stmt).one())

    def order_count_for_farmer(self, session: Session, farmer_id: int) -> int:
        stmt = select(func.count(func.distinct(col(OrderItem.order_id)))).where(
            OrderItem.farmer_id == farmer_id
        )
        return session.exec(stmt).one()
