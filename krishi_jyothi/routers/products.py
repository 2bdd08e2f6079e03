# krishi_jyothi/routers/products.py
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from krishi_jyothi.core.auth import get_identity_catalog
from krishi_jyothi.database import get_session
from krishi_jyothi.repositories.identity_catalog import IdentityCatalog
from krishi_jyothi.repositories.product_repo import ProductRepository
from krishi_jyothi.schemas.product import (
    Category,
    FarmerProfile,
    ProductFilters,
    ProductRead,
    SortBy,
)
from krishi_jyothi.services.product_service import ProductService

router = APIRouter(tags=["Marketplace"])

repo = ProductRepository()
service = ProductService(repo)


@router.get("/products", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    search: str | None = None,
    category: list[Category] = Query(default=[]),
    organic: bool = False,
    min_price: float = Query(default=0, ge=0),
    max_price: float | None = Query(default=None, ge=0),
    sort_by: SortBy = "relevance",
    skip: int = 0,
    limit: int = 50,
):
    """
    Browse the marketplace.

    - Public endpoint; only listed products are returned.
    - `search` matches product or farmer name (case-insensitive).
    - `category` may be repeated.
    - `sort_by`: relevance | price-low | price-high | name.
    """
    filters = ProductFilters(
        search=search,
        categories=category,
        organic=organic,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
    )
    return service.list_marketplace(session, filters, skip=skip, limit=limit)


@router.get("/products/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Get a single listed product by id.
    """
    return service.get_listed_product(session, product_id)


@router.get("/farmers/{farmer_id}", response_model=FarmerProfile)
def get_farmer(
    farmer_id: int,
    session: Session = Depends(get_session),
    catalog: IdentityCatalog = Depends(get_identity_catalog),
):
    """
    Public farmer profile with their listed products.
    """
    return service.get_farmer_profile(session, catalog, farmer_id)
