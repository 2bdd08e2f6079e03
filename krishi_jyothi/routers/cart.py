# krishi_jyothi/routers/cart.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from krishi_jyothi.core.auth import get_current_identity, get_store
from krishi_jyothi.core.config import Settings, get_settings
from krishi_jyothi.core.notifications import NotificationCollector
from krishi_jyothi.core.storage import KeyValueStore
from krishi_jyothi.database import get_session
from krishi_jyothi.repositories.order_repo import OrderRepository
from krishi_jyothi.repositories.product_repo import ProductRepository
from krishi_jyothi.schemas.cart import CartItemAdd, CartQuantityUpdate, CartSummary
from krishi_jyothi.schemas.identity import Identity
from krishi_jyothi.schemas.order import CheckoutResult
from krishi_jyothi.services.cart_manager import CartManager
from krishi_jyothi.services.order_service import OrderService
from krishi_jyothi.services.product_service import ProductService

router = APIRouter(prefix="/cart", tags=["Cart"])

product_repo = ProductRepository()
product_service = ProductService(product_repo)
order_service = OrderService(OrderRepository(), product_repo)


def get_cart_manager(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> CartManager:
    """Cart for this session, loaded once from its key-value store."""
    return CartManager(
        store,
        NotificationCollector(),
        storage_key=settings.CART_STORAGE_KEY,
    )


def _summary(cart: CartManager) -> CartSummary:
    return CartSummary(
        items=cart.items,
        item_count=cart.item_count,
        subtotal=cart.subtotal,
        notifications=cart.notifier.drain(),
    )


@router.get("", response_model=CartSummary)
def get_cart(cart: CartManager = Depends(get_cart_manager)):
    """
    Get the session's cart with item_count and subtotal.

    Guests have carts too; no login needed.
    """
    return _summary(cart)


@router.post("", response_model=CartSummary)
def add_to_cart(
    payload: CartItemAdd,
    session: Session = Depends(get_session),
    cart: CartManager = Depends(get_cart_manager),
):
    """
    Add a product to the cart (or increase its quantity).

    Name, price, unit, image and farmer are taken from the product row.
    """
    line = product_service.to_cart_line(session, payload.product_id)
    cart.add_item(line, payload.quantity)
    return _summary(cart)


@router.patch("/{product_id}", response_model=CartSummary)
def update_cart_item(
    product_id: int,
    payload: CartQuantityUpdate,
    cart: CartManager = Depends(get_cart_manager),
):
    """
    Set the quantity of a line; zero or less removes it.
    """
    cart.update_quantity(product_id, payload.quantity)
    return _summary(cart)


@router.delete("/{product_id}", response_model=CartSummary)
def remove_cart_item(
    product_id: int,
    cart: CartManager = Depends(get_cart_manager),
):
    """
    Remove a product from the cart. Unknown ids are ignored.
    """
    cart.remove_item(product_id)
    return _summary(cart)


@router.delete("", response_model=CartSummary)
def clear_cart(cart: CartManager = Depends(get_cart_manager)):
    """
    Clear the entire cart.
    """
    cart.clear_cart()
    return _summary(cart)


@router.post("/checkout", response_model=CheckoutResult)
def checkout(
    session: Session = Depends(get_session),
    cart: CartManager = Depends(get_cart_manager),
    identity: Identity | None = Depends(get_current_identity),
):
    """
    Place an order for the whole cart and empty it.

    Auth:
      - Requires a logged-in session (401 otherwise).
    """
    order = order_service.checkout(session, identity, cart)
    return CheckoutResult(order=order, notifications=cart.notifier.drain())
