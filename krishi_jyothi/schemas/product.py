# krishi_jyothi/schemas/product.py
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

Category = Literal["vegetables", "fruits", "grains", "dairy", "other"]
SortBy = Literal["relevance", "price-low", "price-high", "name"]


def _not_empty(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    id: int
    farmer_id: int
    farmer_name: str
    name: str
    description: str | None = None
    category: str
    price: float
    unit: str
    stock: int
    organic: bool
    image: str
    listed: bool
    created_at: datetime


class ProductCreate(SQLModel):
    """
    Add-product form draft.

    Required: name, category, price, stock.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    description: str | None = None
    category: Category
    price: float = Field(gt=0)
    unit: str = Field(default="kg", max_length=20)
    stock: int = Field(ge=0)
    organic: bool = False
    image: str | None = None
    listed: bool = True

    @field_validator("name", "unit")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _not_empty(v)


class ProductUpdate(SQLModel):
    """
    Edit-product form draft.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    description: str | None = None
    category: Category | None = None
    price: float | None = Field(default=None, gt=0)
    unit: str | None = Field(default=None, max_length=20)
    stock: int | None = Field(default=None, ge=0)
    organic: bool | None = None
    image: str | None = None
    listed: bool | None = None

    @field_validator("name", "unit")
    @classmethod
    def validate_text(cls, v: str | None) -> str | None:
        return _not_empty(v)


class ProductFilters(SQLModel):
    """Marketplace search / filter / sort parameters."""

    search: str | None = None
    categories: list[Category] = []
    organic: bool = False
    min_price: float = Field(default=0, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    sort_by: SortBy = "relevance"


class FarmerDashboard(SQLModel):
    total_sales: float
    total_orders: int
    total_products: int
    active_listings: int


class FarmerProfile(SQLModel):
    id: int
    name: str
    location: str | None = None
    join_date: str | None = None
    profile_image: str | None = None
    bio: str | None = None
    products: list[ProductRead]
