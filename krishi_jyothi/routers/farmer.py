# krishi_jyothi/routers/farmer.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from krishi_jyothi.core.auth import require_farmer
from krishi_jyothi.database import get_session
from krishi_jyothi.repositories.order_repo import OrderRepository
from krishi_jyothi.repositories.product_repo import ProductRepository
from krishi_jyothi.schemas.identity import Identity
from krishi_jyothi.schemas.product import (
    FarmerDashboard,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from krishi_jyothi.services.order_service import OrderService
from krishi_jyothi.services.product_service import ProductService

router = APIRouter(prefix="/farmer", tags=["Farmer"])

product_repo = ProductRepository()
service = ProductService(product_repo)
order_service = OrderService(OrderRepository(), product_repo)


@router.get("/dashboard", response_model=FarmerDashboard)
def get_dashboard(
    session: Session = Depends(get_session),
    farmer: Identity = Depends(require_farmer),
):
    """
    Sales, orders, products and active listings for the logged-in farmer.
    """
    return order_service.farmer_dashboard(session, farmer)


@router.get("/products", response_model=list[ProductRead])
def list_my_products(
    session: Session = Depends(get_session),
    farmer: Identity = Depends(require_farmer),
):
    """
    All products of the logged-in farmer, listed or not.
    """
    return service.list_for_farmer(session, farmer)


@router.post(
    "/products",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
    farmer: Identity = Depends(require_farmer),
):
    """
    Add a product to the farmer's inventory.
    """
    return service.create_product(session, farmer, payload)


@router.patch("/products/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
    farmer: Identity = Depends(require_farmer),
):
    """
    Edit one of the farmer's products.
    """
    return service.update_product(session, farmer, product_id, payload)


@router.post("/products/{product_id}/toggle-listing", response_model=ProductRead)
def toggle_listing(
    product_id: int,
    session: Session = Depends(get_session),
    farmer: Identity = Depends(require_farmer),
):
    """
    List an unlisted product, or unlist a listed one.
    """
    return service.toggle_listing(session, farmer, product_id)


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_product(
    product_id: int,
    session: Session = Depends(get_session),
    farmer: Identity = Depends(require_farmer),
):
    """
    Remove a product from the farmer's inventory.
    """
    service.delete_product(session, farmer, product_id)
    return None
