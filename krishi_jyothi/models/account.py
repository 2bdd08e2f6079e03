# krishi_jyothi/models/account.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Account(SQLModel, table=True):
    """
    Credential registered through signup.

    The demo accounts are fixed in code and never stored here. Ids are
    assigned by the catalog (next free identity id), not by the database.
    """

    __tablename__ = "accounts"

    id: int = Field(primary_key=True)

    name: str = Field(max_length=100)

    email: str = Field(max_length=255, unique=True, index=True)

    password: str

    role: str = Field(max_length=20)

    location: str | None = Field(default=None, max_length=200)

    join_date: str | None = Field(default=None, max_length=50)

    profile_image: str | None = None

    bio: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
