# krishi_jyothi/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI
from sqlmodel import Session

from krishi_jyothi.core.config import get_settings
from krishi_jyothi.database import create_db_and_tables, engine
from krishi_jyothi.seed import seed_demo_products

# Import models so SQLModel metadata is populated before create_all()
from krishi_jyothi.models import storage as _storage_models  # noqa: F401
from krishi_jyothi.models import product as _product_models  # noqa: F401
from krishi_jyothi.models import order as _order_models  # noqa: F401
from krishi_jyothi.models import account as _account_models  # noqa: F401

# Routers
from krishi_jyothi.routers.sessions import router as sessions_router
from krishi_jyothi.routers.auth import router as auth_router
from krishi_jyothi.routers.cart import router as cart_router
from krishi_jyothi.routers.products import router as products_router
from krishi_jyothi.routers.farmer import router as farmer_router
from krishi_jyothi.routers.widgets import router as widgets_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Create tables.
      - Seed demo products (SEED_DEMO_DATA).

    Shutdown:
      - No special cleanup needed for sync engine.
    """
    logger.info("🔄 Startup: preparing database...")
    try:
        create_db_and_tables()
        if settings.SEED_DEMO_DATA:
            with Session(engine) as session:
                seed_demo_products(session)
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB setup FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "Krishi Jyothi API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(sessions_router, prefix=settings.API_V1_STR)
app.include_router(auth_router, prefix=settings.API_V1_STR)
app.include_router(cart_router, prefix=settings.API_V1_STR)
app.include_router(products_router, prefix=settings.API_V1_STR)
app.include_router(farmer_router, prefix=settings.API_V1_STR)
app.include_router(widgets_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "krishi-jyothi-backend"}
