# krishi_jyothi/services/order_service.py
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from krishi_jyothi.models.order import Order, OrderItem
from krishi_jyothi.repositories.order_repo import OrderRepository
from krishi_jyothi.repositories.product_repo import ProductRepository
from krishi_jyothi.schemas.identity import Identity
from krishi_jyothi.schemas.order import OrderItemRead, OrderRead
from krishi_jyothi.schemas.product import FarmerDashboard
from krishi_jyothi.services.cart_manager import CartManager

logger = logging.getLogger(__name__)


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Turn the session's cart into an Order (checkout)
      - Clear the cart after success
      - Aggregate farmer dashboard numbers
    """

    def __init__(self, order_repo: OrderRepository, product_repo: ProductRepository):
        self.order_repo = order_repo
        self.product_repo = product_repo

    def checkout(
        self,
        session: Session,
        identity: Identity | None,
        cart: CartManager,
    ) -> OrderRead:
        """
        Place an order for everything in the cart.

        Steps:
          1. Require a logged-in identity.
          2. Require a non-empty cart.
          3. Snapshot every line into an OrderItem, total = cart subtotal.
          4. Persist the order, then clear the cart, all under the cart lock.
        """
        if identity is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="You need to be logged in to checkout.",
            )

        with cart.locked():
            lines = cart.items
            if not lines:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Cart is empty",
                )

            order = Order(
                identity_id=identity.id,
                customer_name=identity.name,
                total=cart.subtotal,
            )
            items = [
                OrderItem(
                    product_id=line.id,
                    farmer_id=line.farmer_id,
                    name=line.name,
                    unit=line.unit,
                    price=line.price,
                    quantity=line.quantity,
                    line_total=line.line_total,
                )
                for line in lines
            ]
            order = self.order_repo.create_with_items(session, order, items)

            cart.clear_cart()
        cart.notifier.push(
            "Order placed successfully!",
            "Your order has been placed and will be processed shortly.",
        )
        logger.info(
            "Order %s placed by identity %s: %d lines, total %.2f",
            order.id,
            identity.id,
            len(items),
            order.total,
        )

        return self.to_read(session, order)

    def to_read(self, session: Session, order: Order) -> OrderRead:
        items = self.order_repo.list_items(session, order.id)
        return OrderRead(
            id=order.id,
            identity_id=order.identity_id,
            customer_name=order.customer_name,
            total=order.total,
            status=order.status,
            created_at=order.created_at,
            items=[OrderItemRead.model_validate(i, from_attributes=True) for i in items],
        )

    def farmer_dashboard(self, session: Session, farmer: Identity) -> FarmerDashboard:
        products = self.product_repo.list_for_farmer(session, farmer.id)
        return FarmerDashboard(
            total_sales=self.order_repo.sales_total_for_farmer(session, farmer.id),
            total_orders=self.order_repo.order_count_for_farmer(session, farmer.id),
            total_products=len(products),
            active_listings=sum(1 for p in products if p.listed),
        )
