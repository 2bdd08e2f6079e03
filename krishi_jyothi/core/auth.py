# krishi_jyothi/core/auth.py
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from krishi_jyothi.core.config import Settings, get_settings
from krishi_jyothi.core.storage import DatabaseKeyValueStore, KeyValueStore
from krishi_jyothi.database import get_session
from krishi_jyothi.repositories.identity_catalog import (
    DatabaseIdentityCatalog,
    IdentityCatalog,
)
from krishi_jyothi.schemas.identity import Identity
from krishi_jyothi.services.session_manager import SessionManager

# HTTP Bearer scheme:
# - auto_error=False => we raise our own 401 with a clearer message.
bearer_scheme = HTTPBearer(auto_error=False)


def create_session_token(scope: str | None = None) -> str:
    """
    Issue a signed token naming a new (or given) storage scope.

    The token identifies a browser session only; who is logged in is
    kept in that session's key-value store.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    claims = {
        "sub": scope or uuid.uuid4().hex,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=settings.SESSION_TTL_DAYS)).timestamp()),
    }
    return jwt.encode(claims, settings.SESSION_SECRET, algorithm=settings.SESSION_ALG)


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry of a session token.

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.SESSION_SECRET,
            algorithms=[settings.SESSION_ALG],
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session token",
        )


def get_session_scope(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """
    Resolve the storage scope from the bearer session token.

    Raises:
        HTTPException(401): missing token or token without a subject.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session token required",
        )

    payload = decode_session_token(credentials.credentials)
    scope = payload.get("sub")
    if not scope:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session token missing sub",
        )
    return scope


def get_store(
    scope: str = Depends(get_session_scope),
    session: Session = Depends(get_session),
) -> KeyValueStore:
    """The session's key-value store (its "local storage")."""
    return DatabaseKeyValueStore(session, scope)


def get_identity_catalog(session: Session = Depends(get_session)) -> IdentityCatalog:
    """Demo credentials plus accounts registered in the database."""
    return DatabaseIdentityCatalog(session)


def get_session_manager(
    store: KeyValueStore = Depends(get_store),
    catalog: IdentityCatalog = Depends(get_identity_catalog),
    settings: Settings = Depends(get_settings),
) -> SessionManager:
    """
    Build the session manager for this request.

    It reads the persisted identity once, like a page load would.
    """
    return SessionManager(
        store,
        catalog,
        delay=settings.AUTH_DELAY_SECONDS,
        storage_key=settings.USER_STORAGE_KEY,
        register_on_signup=settings.REGISTER_ON_SIGNUP,
    )


def get_current_identity(
    manager: SessionManager = Depends(get_session_manager),
) -> Identity | None:
    """None for anonymous sessions."""
    return manager.identity if manager.is_authenticated else None


def require_auth(identity: Identity | None = Depends(get_current_identity)) -> Identity:
    """
    Enforce authentication.

    Raises:
        HTTPException(401): if nobody is logged in.
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return identity


def require_farmer(identity: Identity | None = Depends(get_current_identity)) -> Identity:
    """
    Gate for the farmer area.

    Raises:
        HTTPException(401): anonymous session.
        HTTPException(403): logged in with another role.
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You must be logged in as a farmer to access this page.",
        )
    if identity.role != "farmer":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You must be logged in as a farmer to access this page.",
        )
    return identity
