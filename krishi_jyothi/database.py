# krishi_jyothi/database.py
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from krishi_jyothi.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Database connection
#
# - SQLite (default): check_same_thread=False because FastAPI runs
#   sync endpoints in a threadpool. An in-memory URL ("sqlite://")
#   must share one connection, hence StaticPool.
# - Postgres: sslmode=require and a small pool, as for any hosted DB.
# ---------------------------------------------------------

db_url = settings.DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return kwargs

    return {
        "pool_pre_ping": True,
        "pool_size": 1,
        "max_overflow": 0,
    }


# Append sslmode=require for Postgres if it is not already present
if db_url.startswith("postgres") and "sslmode=" not in db_url:
    if "?" in db_url:
        db_url = db_url + "&sslmode=require"
    else:
        db_url = db_url + "?sslmode=require"

engine = create_engine(
    db_url,
    echo=False,  # set to True if you want to debug SQL queries
    **_engine_kwargs(db_url),
)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
