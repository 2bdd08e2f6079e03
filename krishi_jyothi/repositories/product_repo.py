# krishi_jyothi/repositories/product_repo.py
from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from krishi_jyothi.models.product import Product
from krishi_jyothi.schemas.product import ProductFilters


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: int) -> Product | None:
        return session.get(Product, product_id)

    def count(self, session: Session) -> int:
        return session.exec(select(func.count()).select_from(Product)).one()

    def list_listed(
        self,
        session: Session,
        filters: ProductFilters,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Product]:
        """
        Marketplace query: listed products only, filtered and sorted.
        """
        stmt = select(Product).where(Product.listed == True)  # noqa: E712

        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            stmt = stmt.where(
                or_(
                    col(Product.name).ilike(pattern),
                    col(Product.farmer_name).ilike(pattern),
                )
            )

        if filters.categories:
            stmt = stmt.where(col(Product.category).in_(filters.categories))

        if filters.organic:
            stmt = stmt.where(Product.organic == True)  # noqa: E712

        stmt = stmt.where(Product.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(Product.price <= filters.max_price)

        if filters.sort_by == "price-low":
            stmt = stmt.order_by(col(Product.price).asc(), Product.id)
        elif filters.sort_by == "price-high":
            stmt = stmt.order_by(col(Product.price).desc(), Product.id)
        elif filters.sort_by == "name":
            stmt = stmt.order_by(Product.name)
        else:
            stmt = stmt.order_by(Product.id)

        stmt = stmt.offset(skip).limit(limit)
        return session.exec(stmt).all()

    def list_for_farmer(
        self,
        session: Session,
        farmer_id: int,
        only_listed: bool = False,
    ) -> list[Product]:
        stmt = select(Product).where(Product.farmer_id == farmer_id)
        if only_listed:
            stmt = stmt.where(Product.listed == True)  # noqa: E712
        stmt = stmt.order_by(Product.id)
        return session.exec(stmt).all()

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def create_many(self, session: Session, products: list[Product]) -> None:
        session.add_all(products)
        session.commit()

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        session.delete(product)
        session.commit()
