"""Session cookie transport and the request authentication dependency."""
import logging

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.tokens import (
    InvalidTokenError,
    Session,
    TokenExpiredError,
    decode_session_token,
    encode_session_token,
    token_ttl_seconds,
)
from db.session import get_async_session
from services import session_service
from services.exceptions import UnauthorizedError
from services.session_service import Identity, SessionGrant

logger = logging.getLogger(__name__)

# Profile cookie set by older web clients; expired on logout alongside the session
LEGACY_PROFILE_COOKIE_NAME = "jwt-aurastream-profile"


def set_session_cookie(response: Response, grant: SessionGrant, settings: Settings) -> str:
    """
    Sign the granted session and bind it to the response cookie.

    Replaces whatever session cookie the client held. Returns the token.
    """
    token = encode_session_token(grant.session, settings.jwt_secret, grant.ttl)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=token_ttl_seconds(grant.ttl),
        httponly=True,
        samesite="strict",
        secure=settings.cookie_secure,
        path="/",
    )
    return token


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Expire the session cookie, and the legacy profile cookie, on the client."""
    for name in (settings.session_cookie_name, LEGACY_PROFILE_COOKIE_NAME):
        response.delete_cookie(
            name,
            path="/",
            httponly=True,
            samesite="strict",
            secure=settings.cookie_secure,
        )


def decode_request_session(request: Request, settings: Settings) -> Session:
    """
    Decode and verify the session token carried by the request cookie.

    Raises:
        UnauthorizedError: If the cookie is missing, or the token is expired or invalid.
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise UnauthorizedError("Unauthorized - No token provided")

    try:
        return decode_session_token(token, settings.jwt_secret)
    except TokenExpiredError:
        raise UnauthorizedError("Unauthorized - Token expired")
    except InvalidTokenError as e:
        logger.warning("Session token validation failed: %s", e)
        raise UnauthorizedError("Unauthorized - Invalid token")


async def get_current_identity(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """
    Dependency that authenticates the request and loads its account and profile.

    Runs before any business logic: a missing or invalid cookie answers 401, a
    valid token whose account or profile no longer exists answers 404.
    """
    session = decode_request_session(request, settings)
    return await session_service.resolve_identity(db, session)
