# krishi_jyothi/routers/auth.py
from fastapi import APIRouter, Depends

from krishi_jyothi.core.auth import get_session_manager, require_auth
from krishi_jyothi.core.notifications import NotificationCollector
from krishi_jyothi.schemas.identity import (
    AuthResult,
    Identity,
    IdentityUpdate,
    LoginRequest,
    SessionRead,
    SignupRequest,
)
from krishi_jyothi.services.session_manager import SessionManager

router = APIRouter(prefix="/auth", tags=["Auth"])


def _result(manager: SessionManager, success: bool, notifier: NotificationCollector) -> AuthResult:
    return AuthResult(
        success=success,
        state=manager.state,
        identity=manager.identity,
        notifications=notifier.drain(),
    )


@router.get("/me", response_model=SessionRead)
def read_session(manager: SessionManager = Depends(get_session_manager)):
    """
    Current session state and identity (null when logged out).
    """
    return SessionRead(state=manager.state, identity=manager.identity)


@router.post("/login", response_model=AuthResult)
async def login(
    payload: LoginRequest,
    manager: SessionManager = Depends(get_session_manager),
):
    """
    Log in against the demo catalog.

    Bad credentials are not an HTTP error: the response has
    success=false and a notification to show.
    """
    notifier = NotificationCollector()
    success = await manager.login(payload.email, payload.password)
    if success:
        notifier.push("Login successful", f"Welcome back, {manager.identity.name}!")
    else:
        notifier.push(
            "Login failed",
            "Invalid email or password. Please try again.",
            variant="destructive",
        )
    return _result(manager, success, notifier)


@router.post("/signup", response_model=AuthResult)
async def signup(
    payload: SignupRequest,
    manager: SessionManager = Depends(get_session_manager),
):
    """
    Create an account and log it in.

    A duplicate email yields success=false, leaving the session as it was.
    """
    notifier = NotificationCollector()
    success = await manager.signup(
        payload.name, payload.email, payload.password, payload.role
    )
    if success:
        notifier.push("Account created successfully", "Welcome to Krishi Jyothi!")
    else:
        notifier.push(
            "Registration failed",
            "This email is already registered. Please try another one.",
            variant="destructive",
        )
    return _result(manager, success, notifier)


@router.post("/logout", response_model=AuthResult)
def logout(manager: SessionManager = Depends(get_session_manager)):
    """
    Forget the current identity for this session.
    """
    manager.logout()
    return _result(manager, True, NotificationCollector())


@router.patch(
    "/me",
    response_model=Identity,
    dependencies=[Depends(require_auth)],
)
def update_profile(
    payload: IdentityUpdate,
    manager: SessionManager = Depends(get_session_manager),
):
    """
    Merge profile changes into the current identity.

    Auth:
      - Requires a logged-in session.
    """
    return manager.update_profile(payload)
