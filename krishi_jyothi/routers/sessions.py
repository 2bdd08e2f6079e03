# krishi_jyothi/routers/sessions.py
from fastapi import APIRouter, status

from krishi_jyothi.core.auth import create_session_token
from krishi_jyothi.schemas.identity import SessionToken

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post("", response_model=SessionToken, status_code=status.HTTP_201_CREATED)
def open_session():
    """
    Open a new browser session.

    The returned token must be sent as `Authorization: Bearer <token>`
    on every other call; it scopes the cart and login state.
    """
    return SessionToken(token=create_session_token())
