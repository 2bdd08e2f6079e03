# krishi_jyothi/services/session_manager.py
import asyncio
import logging
from datetime import date

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from krishi_jyothi.core.storage import KeyValueStore
from krishi_jyothi.repositories.identity_catalog import IdentityCatalog
from krishi_jyothi.schemas.identity import (
    Identity,
    IdentityUpdate,
    Role,
    SessionState,
)

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "krishijyothi_user"


def format_join_date(day: date) -> str:
    """'Month Year', e.g. 'June 2025'."""
    return f"{day.strftime('%B')} {day.year}"


class SessionManager:
    """
    Owns "who is using the application right now" for one browser session.

    State machine:
      - AUTHENTICATING while the persisted identity is read on construction,
        and while login/signup wait out the simulated latency.
      - AUTHENTICATED(identity) / UNAUTHENTICATED otherwise.

    The key-value store is read once here; afterwards in-memory state is the
    source of truth and is written back on every identity-affecting call.

    Invalid credentials and duplicate signups are ordinary False results,
    never exceptions.
    """

    def __init__(
        self,
        store: KeyValueStore,
        catalog: IdentityCatalog,
        *,
        delay: float = 0.0,
        storage_key: str = DEFAULT_STORAGE_KEY,
        register_on_signup: bool = True,
    ):
        self.store = store
        self.catalog = catalog
        self.delay = delay
        self.storage_key = storage_key
        self.register_on_signup = register_on_signup

        self._identity: Identity | None = None
        self._state = SessionState.AUTHENTICATING
        self._restore()

    # ---- properties ----

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        return self._state is SessionState.AUTHENTICATING

    # ---- internal helpers ----

    def _restore(self) -> None:
        raw = self.store.get(self.storage_key)
        if raw:
            try:
                self._identity = Identity.model_validate_json(raw)
            except ValidationError as e:
                logger.warning("Discarding malformed persisted identity: %s", e)
                self.store.remove(self.storage_key)

        self._state = (
            SessionState.AUTHENTICATED
            if self._identity is not None
            else SessionState.UNAUTHENTICATED
        )

    def _set_identity(self, identity: Identity) -> None:
        self._identity = identity
        self._state = SessionState.AUTHENTICATED
        self.store.set(self.storage_key, identity.model_dump_json())

    async def _simulate_latency(self) -> None:
        if self.delay > 0:
            await asyncio.sleep(self.delay)

    # ---- public operations ----

    async def login(self, email: str, password: str) -> bool:
        """
        Look the credentials up in the catalog.

        Returns:
            True and becomes AUTHENTICATED on a match; False otherwise,
            with the previous state left as it was.
        """
        previous = self._state
        self._state = SessionState.AUTHENTICATING
        await self._simulate_latency()
        # Catalog and store may hit the database
        return await run_in_threadpool(self._complete_login, email, password, previous)

    def _complete_login(self, email: str, password: str, previous: SessionState) -> bool:
        identity = self.catalog.authenticate(email, password)
        if identity is None:
            self._state = previous
            logger.info("Login failed for %s", email)
            return False

        self._set_identity(identity)
        logger.info("Login succeeded for %s (id=%s)", email, identity.id)
        return True

    async def signup(self, name: str, email: str, password: str, role: Role) -> bool:
        """
        Create a fresh identity and log it in.

        Rules:
          - email already in the catalog => False, session untouched
          - id is the next free catalog id
          - join_date is "Month Year" of today, location/bio empty
          - when register_on_signup is set the credential is added to the
            catalog so the user can log in again later
        """
        previous = self._state
        self._state = SessionState.AUTHENTICATING
        await self._simulate_latency()
        return await run_in_threadpool(
            self._complete_signup, name, email, password, role, previous
        )

    def _complete_signup(
        self,
        name: str,
        email: str,
        password: str,
        role: Role,
        previous: SessionState,
    ) -> bool:
        if self.catalog.email_exists(email):
            self._state = previous
            logger.info("Signup rejected, email already registered: %s", email)
            return False

        identity = Identity(
            id=self.catalog.next_id(),
            name=name,
            email=email,
            role=role,
            location="",
            join_date=format_join_date(date.today()),
            profile_image=None,
            bio="",
        )
        if self.register_on_signup:
            self.catalog.register(identity, password)

        self._set_identity(identity)
        logger.info("Signup succeeded for %s (id=%s)", email, identity.id)
        return True

    def logout(self) -> None:
        self.store.remove(self.storage_key)
        self._identity = None
        self._state = SessionState.UNAUTHENTICATED

    def update_profile(self, changes: IdentityUpdate) -> Identity | None:
        """
        Shallow-merge the set fields of `changes` into the current identity.

        Returns the updated identity, or None when nobody is logged in.
        """
        if self._identity is None:
            return None

        merged = self._identity.model_copy(
            update=changes.model_dump(exclude_unset=True)
        )
        self._set_identity(merged)
        return merged
