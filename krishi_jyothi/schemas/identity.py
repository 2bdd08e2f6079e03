# krishi_jyothi/schemas/identity.py
from enum import Enum
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator, model_validator
from sqlmodel import SQLModel, Field

from krishi_jyothi.core.notifications import Notification

Role = Literal["farmer", "consumer"]


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


def _normalize_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty")
    return v


class Identity(SQLModel):
    """
    The logged-in actor, as held by the session manager and persisted
    in the session's key-value store.

    Never carries a password: credentials live only in the catalog.
    """

    id: int
    name: str
    email: EmailStr
    role: Role
    location: str | None = None
    join_date: str | None = None
    profile_image: str | None = None
    bio: str | None = None


class IdentityUpdate(SQLModel):
    """
    Partial profile update. Only set fields are merged.

    `id` and `email` are immutable and therefore not accepted.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=200)
    profile_image: str | None = None
    bio: str | None = Field(default=None, max_length=1000)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return _normalize_name(v)


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)


class SignupRequest(SQLModel):
    """
    Signup form draft.

    Validation rules:
      - name cannot be empty or whitespace
      - password and confirm_password must match
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)
    confirm_password: str
    role: Role = "consumer"

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return _normalize_name(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "SignupRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class SessionRead(SQLModel):
    state: SessionState
    identity: Identity | None = None


class AuthResult(SessionRead):
    """Outcome of login/signup/logout. success=False is not an error."""

    success: bool
    notifications: list[Notification] = []


class SessionToken(SQLModel):
    token: str
    token_type: str = "bearer"
