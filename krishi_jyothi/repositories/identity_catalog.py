# krishi_jyothi/repositories/identity_catalog.py
from typing import Protocol

from sqlmodel import Session

from krishi_jyothi.models.account import Account
from krishi_jyothi.repositories.account_repo import AccountRepository
from krishi_jyothi.schemas.identity import Identity

PLACEHOLDER_IMAGE = "/placeholder.svg?height=200&width=200"


class Credential(Identity):
    """Catalog record: an identity plus its (demo, plain-text) password."""

    password: str

    def to_identity(self) -> Identity:
        return Identity.model_validate(self.model_dump(exclude={"password"}))


DEMO_CREDENTIALS: list[dict] = [
    {
        "id": 1,
        "name": "Rajesh Patel",
        "email": "farmer@example.com",
        "password": "password123",
        "role": "farmer",
        "location": "Nashik, Maharashtra",
        "join_date": "January 2023",
        "profile_image": PLACEHOLDER_IMAGE,
        "bio": "Third-generation farmer specializing in organic vegetables and sustainable farming practices.",
    },
    {
        "id": 2,
        "name": "Priya Sharma",
        "email": "consumer@example.com",
        "password": "password123",
        "role": "consumer",
        "location": "Mumbai, Maharashtra",
        "join_date": "March 2023",
        "profile_image": PLACEHOLDER_IMAGE,
        "bio": "Passionate about supporting local farmers and eating fresh, organic produce.",
    },
]


class IdentityCatalog(Protocol):
    """Credential lookups used by the session manager and farmer profiles."""

    def authenticate(self, email: str, password: str) -> Identity | None: ...

    def get_by_id(self, identity_id: int) -> Identity | None: ...

    def email_exists(self, email: str) -> bool: ...

    def next_id(self) -> int: ...

    def register(self, identity: Identity, password: str) -> None: ...


class InMemoryIdentityCatalog:
    """
    Credential catalog held in process memory.

    - Seeded with the demo farmer and consumer accounts.
    - Email uniqueness is checked against this catalog only.
    - Registrations vanish with the process; tests build a fresh one per case.
    """

    def __init__(self, records: list[dict] | None = None):
        seed = DEMO_CREDENTIALS if records is None else records
        self._records: list[Credential] = [Credential.model_validate(r) for r in seed]

    def __len__(self) -> int:
        return len(self._records)

    def authenticate(self, email: str, password: str) -> Identity | None:
        """Return the password-less identity for matching credentials, else None."""
        for record in self._records:
            if record.email == email and record.password == password:
                return record.to_identity()
        return None

    def get_by_id(self, identity_id: int) -> Identity | None:
        for record in self._records:
            if record.id == identity_id:
                return record.to_identity()
        return None

    def email_exists(self, email: str) -> bool:
        return any(r.email == email for r in self._records)

    def next_id(self) -> int:
        return max((r.id for r in self._records), default=0) + 1

    def register(self, identity: Identity, password: str) -> None:
        if self.email_exists(identity.email):
            raise ValueError(f"Email already registered: {identity.email}")
        self._records.append(
            Credential(**identity.model_dump(), password=password)
        )


def _account_identity(account: Account) -> Identity:
    return Identity.model_validate(
        account.model_dump(exclude={"password", "created_at"})
    )


class DatabaseIdentityCatalog:
    """
    Demo credentials plus accounts registered through signup.

    Registrations are rows in `accounts`, so they survive a restart.
    New ids skip every identity id already referenced by stored accounts,
    products or orders.

    Args:
        session: open DB session (request-scoped).
    """

    def __init__(
        self,
        session: Session,
        repo: AccountRepository | None = None,
        fixed: InMemoryIdentityCatalog | None = None,
    ):
        self.session = session
        self.repo = repo or AccountRepository()
        self.fixed = fixed or InMemoryIdentityCatalog()

    def authenticate(self, email: str, password: str) -> Identity | None:
        identity = self.fixed.authenticate(email, password)
        if identity is not None:
            return identity
        account = self.repo.get_by_email(self.session, email)
        if account is None or account.password != password:
            return None
        return _account_identity(account)

    def get_by_id(self, identity_id: int) -> Identity | None:
        identity = self.fixed.get_by_id(identity_id)
        if identity is not None:
            return identity
        account = self.repo.get_by_id(self.session, identity_id)
        return _account_identity(account) if account else None

    def email_exists(self, email: str) -> bool:
        if self.fixed.email_exists(email):
            return True
        return self.repo.get_by_email(self.session, email) is not None

    def next_id(self) -> int:
        return max(self.fixed.next_id(), self.repo.highest_identity_id(self.session) + 1)

    def register(self, identity: Identity, password: str) -> None:
        if self.email_exists(identity.email):
            raise ValueError(f"Email already registered: {identity.email}")
        self.repo.create(
            self.session,
            Account(**identity.model_dump(), password=password),
        )
