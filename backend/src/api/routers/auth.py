"""Account and session endpoints: signup, login, logout, identity check, profile switch, limits."""
from dataclasses import asdict

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_identity, get_settings
from core.auth import clear_session_cookie, set_session_cookie
from core.config import Settings
from core.limits import get_account_limits
from schemas.account import (
    AccountResponse,
    AuthResponse,
    LoginRequest,
    SignupRequest,
    SwitchProfileRequest,
)
from schemas.account_limits import AccountLimitsResponse
from schemas.base import MessageResponse
from schemas.profile import ProfileResponse
from services import account_service, session_service
from services.session_service import Identity

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    data: SignupRequest,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """
    Create an account and start an account-scoped session.

    The password is never echoed back; `user.password` is always empty.
    """
    account = await account_service.create_account(db, data)
    set_session_cookie(response, session_service.open_account_session(account), settings)
    return AuthResponse(user=AccountResponse.model_validate(account))


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """
    Authenticate with email and password.

    If the account has a default profile it is selected and returned, and the
    cookie is profile-scoped. Bad credentials answer 404 "Invalid credentials".
    """
    account = await account_service.authenticate(db, data)
    grant = await session_service.start_session(db, account)
    set_session_cookie(response, grant, settings)

    if grant.profile is None:
        return AuthResponse(
            user=AccountResponse.model_validate(account),
            message="No profile found, please create one.",
        )
    return AuthResponse(
        user=AccountResponse.model_validate(account),
        profile=ProfileResponse.model_validate(grant.profile),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    """End the session. Always succeeds, whatever state the caller was in."""
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out successfully")


@router.get("/authCheck", response_model=AuthResponse)
async def auth_check(identity: Identity = Depends(get_current_identity)) -> AuthResponse:
    """Report the account (and selected profile, if any) behind the session cookie."""
    return AuthResponse(
        user=AccountResponse.model_validate(identity.account),
        profile=(
            ProfileResponse.model_validate(identity.profile)
            if identity.profile is not None
            else None
        ),
    )


@router.post("/switchProfile", response_model=AuthResponse)
async def switch_profile(
    data: SwitchProfileRequest,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """
    Select one of the account's profiles.

    On success the cookie is replaced with a profile-scoped token. A profile that
    does not exist or belongs to another account answers 404 and leaves the
    cookie untouched.
    """
    grant = await session_service.switch_profile(db, identity.session, data.profile_id)
    set_session_cookie(response, grant, settings)
    return AuthResponse(
        user=AccountResponse.model_validate(identity.account),
        profile=ProfileResponse.model_validate(grant.profile),
        message="Profile switched successfully",
    )


@router.get("/limits", response_model=AccountLimitsResponse)
async def get_limits(
    _identity: Identity = Depends(get_current_identity),
) -> AccountLimitsResponse:
    """
    Get the limits applied to the caller's account.

    Includes `checkpointSyncIntervalSeconds`, the interval at which players
    should report playback checkpoints.
    """
    return AccountLimitsResponse(**asdict(get_account_limits()))
