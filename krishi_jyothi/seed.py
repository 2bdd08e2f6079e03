# krishi_jyothi/seed.py
import logging

from sqlmodel import Session

from krishi_jyothi.models.product import Product
from krishi_jyothi.repositories.product_repo import ProductRepository

logger = logging.getLogger(__name__)

# Owned by the demo farmer account (catalog id 1)
DEMO_FARMER_ID = 1
DEMO_FARMER_NAME = "Rajesh Patel"

DEMO_PRODUCTS: list[dict] = [
    {
        "name": "Organic Tomatoes",
        "description": "Fresh, juicy organic tomatoes grown without pesticides. Perfect for salads and cooking.",
        "category": "vegetables",
        "price": 60,
        "unit": "kg",
        "stock": 150,
        "organic": True,
    },
    {
        "name": "Fresh Spinach",
        "description": "Nutrient-rich organic spinach leaves. Locally grown and harvested daily.",
        "category": "vegetables",
        "price": 40,
        "unit": "bunch",
        "stock": 75,
        "organic": True,
    },
    {
        "name": "Alphonso Mangoes",
        "description": "Premium Alphonso mangoes known for their exceptional sweetness and flavor.",
        "category": "fruits",
        "price": 350,
        "unit": "dozen",
        "stock": 25,
        "organic": True,
    },
    {
        "name": "Basmati Rice",
        "description": "Aromatic long-grain basmati rice. Grown using traditional farming methods.",
        "category": "grains",
        "price": 150,
        "unit": "kg",
        "stock": 200,
        "organic": False,
        "listed": False,
    },
]


def seed_demo_products(session: Session, repo: ProductRepository | None = None) -> int:
    """
    Insert the demo products if the table is empty.

    Returns:
        Number of products inserted (0 when data already exists).
    """
    repo = repo or ProductRepository()
    if repo.count(session) > 0:
        return 0

    products = [
        Product(farmer_id=DEMO_FARMER_ID, farmer_name=DEMO_FARMER_NAME, **data)
        for data in DEMO_PRODUCTS
    ]
    repo.create_many(session, products)
    logger.info("Seeded %d demo products", len(products))
    return len(products)
