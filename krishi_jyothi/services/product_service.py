# krishi_jyothi/services/product_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from krishi_jyothi.models.product import Product
from krishi_jyothi.repositories.identity_catalog import IdentityCatalog
from krishi_jyothi.repositories.product_repo import ProductRepository
from krishi_jyothi.schemas.cart import CartLineItem
from krishi_jyothi.schemas.identity import Identity
from krishi_jyothi.schemas.product import (
    FarmerProfile,
    ProductCreate,
    ProductFilters,
    ProductRead,
    ProductUpdate,
)


class ProductService:
    """
    Business logic for marketplace products.

    Responsibilities:
      - marketplace browsing (listed products only)
      - farmer-owned CRUD (ownership enforced here, role at the router)
      - snapshotting a product into a cart line
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    # ----- Marketplace -----

    def list_marketplace(
        self,
        session: Session,
        filters: ProductFilters,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Product]:
        return self.repo.list_listed(session, filters, skip=skip, limit=limit)

    def get_listed_product(self, session: Session, product_id: int) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product or not product.listed:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def to_cart_line(self, session: Session, product_id: int) -> CartLineItem:
        """
        Build a cart line (quantity 1) from the current product row.

        Raises:
            HTTPException(404): unknown product.
            HTTPException(400): product is not listed.
        """
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        if not product.listed:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product is not listed",
            )

        return CartLineItem(
            id=product.id,
            name=product.name,
            price=product.price,
            quantity=1,
            unit=product.unit,
            image=product.image,
            farmer_id=product.farmer_id,
            farmer_name=product.farmer_name,
            organic=product.organic,
        )

    def get_farmer_profile(
        self,
        session: Session,
        catalog: IdentityCatalog,
        farmer_id: int,
    ) -> FarmerProfile:
        farmer = catalog.get_by_id(farmer_id)
        if farmer is None or farmer.role != "farmer":
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Farmer not found",
            )

        products = self.repo.list_for_farmer(session, farmer_id, only_listed=True)
        return FarmerProfile(
            id=farmer.id,
            name=farmer.name,
            location=farmer.location,
            join_date=farmer.join_date,
            profile_image=farmer.profile_image,
            bio=farmer.bio,
            products=[ProductRead.model_validate(p, from_attributes=True) for p in products],
        )

    # ----- Farmer-owned products -----

    def list_for_farmer(self, session: Session, farmer: Identity) -> list[Product]:
        return self.repo.list_for_farmer(session, farmer.id)

    def get_owned_product(
        self,
        session: Session,
        farmer: Identity,
        product_id: int,
    ) -> Product:
        """
        Products of other farmers are reported as not found.
        """
        product = self.repo.get_by_id(session, product_id)
        if not product or product.farmer_id != farmer.id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def create_product(
        self,
        session: Session,
        farmer: Identity,
        payload: ProductCreate,
    ) -> Product:
        data = payload.model_dump(exclude_none=True)
        product = Product(
            farmer_id=farmer.id,
            farmer_name=farmer.name,
            **data,
        )
        return self.repo.create(session, product)

    def update_product(
        self,
        session: Session,
        farmer: Identity,
        product_id: int,
        payload: ProductUpdate,
    ) -> Product:
        """
        Partial update; only fields present in the payload change.
        """
        product = self.get_owned_product(session, farmer, product_id)

        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None and field != "description":
                continue
            setattr(product, field, value)

        return self.repo.update(session, product)

    def toggle_listing(
        self,
        session: Session,
        farmer: Identity,
        product_id: int,
    ) -> Product:
        product = self.get_owned_product(session, farmer, product_id)
        product.listed = not product.listed
        return self.repo.update(session, product)

    def delete_product(
        self,
        session: Session,
        farmer: Identity,
        product_id: int,
    ) -> None:
        product = self.get_owned_product(session, farmer, product_id)
        self.repo.delete(session, product)
