"""
Session token codec.

A session token is a signed JWT carrying the account identity and, once a viewer
profile has been selected, the profile identity as well. The claim set is decoded
into one of two session variants so callers have to handle both explicitly:

    AccountSession(account_id)              - logged in, no profile selected
    ProfileSession(account_id, profile_id)  - logged in with a profile selected

The codec knows nothing about cookies or HTTP; see core.auth for transport.
"""
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

ALGORITHM = "HS256"

# Signup, login (with or without an auto-selected profile) and the downgrade
# issued after deleting the selected profile.
LOGIN_TOKEN_TTL = timedelta(days=15)
# Explicit profile switch and profile creation.
PROFILE_SELECTION_TOKEN_TTL = timedelta(days=10)

_REQUIRED_CLAIMS = ["account_id", "exp", "iat"]


class TokenError(Exception):
    """Base class for session token decoding failures."""


class TokenExpiredError(TokenError):
    """Raised when a token's signature is valid but it has expired."""

    def __init__(self) -> None:
        super().__init__("Token expired")


class InvalidTokenError(TokenError):
    """Raised when a token is malformed, tampered with, or carries bad claims."""

    def __init__(self, reason: str = "Invalid token") -> None:
        super().__init__(reason)


@dataclass(frozen=True)
class AccountSession:
    """Session with only the account identity established."""

    account_id: UUID


@dataclass(frozen=True)
class ProfileSession:
    """Session with both the account and a selected viewer profile."""

    account_id: UUID
    profile_id: UUID


Session = AccountSession | ProfileSession


def encode_session_token(
    session: Session,
    secret: str,
    ttl: timedelta,
    now: datetime | None = None,
) -> str:
    """
    Sign a session into a JWT.

    Args:
        session: The session to encode.
        secret: HMAC signing secret.
        ttl: Lifetime of the token; becomes the `exp` claim.
        now: Issue time, defaults to the current time.

    Returns:
        The encoded token string.
    """
    issued_at = now or datetime.now(UTC)
    claims: dict[str, object] = {
        "account_id": str(session.account_id),
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    match session:
        case ProfileSession(profile_id=profile_id):
            claims["profile_id"] = str(profile_id)
        case AccountSession():
            pass
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def decode_session_token(token: str, secret: str) -> Session:
    """
    Verify a JWT and decode it into a session variant.

    Raises:
        TokenExpiredError: If the token has expired.
        InvalidTokenError: If the signature, structure, or claims are invalid.
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": _REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError() from e

    try:
        account_id = UUID(claims["account_id"])
        profile_claim = claims.get("profile_id")
        profile_id = UUID(profile_claim) if profile_claim is not None else None
    except (TypeError, ValueError, AttributeError) as e:
        raise InvalidTokenError("Invalid token: malformed identity claim") from e

    if profile_id is None:
        return AccountSession(account_id=account_id)
    return ProfileSession(account_id=account_id, profile_id=profile_id)


def token_ttl_seconds(ttl: timedelta) -> int:
    """Cookie max-age matching a token lifetime."""
    return int(ttl.total_seconds())
