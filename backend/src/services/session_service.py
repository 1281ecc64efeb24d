"""
Session state machine: which session a caller holds after each transition.

    Unauthenticated --signup--------------> AccountSession
    Unauthenticated --login---------------> AccountSession, or ProfileSession when
                                            the account has a default profile
    Account/ProfileSession --switch-------> ProfileSession (same session on failure)
    Account/ProfileSession --create profile-> ProfileSession for the new profile
    ProfileSession --delete own selected profile--> AccountSession
    any --logout--------------------------> Unauthenticated

Functions here decide the next session and its token lifetime and return a
SessionGrant. They never touch cookies; the API layer writes the grant into a
single Set-Cookie, so a failed transition leaves the caller's cookie unchanged.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from core.authorization import owns
from core.tokens import (
    LOGIN_TOKEN_TTL,
    PROFILE_SELECTION_TOKEN_TTL,
    AccountSession,
    ProfileSession,
    Session,
)
from models.account import Account
from models.profile import Profile
from services import account_service, profile_service
from services.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionGrant:
    """A session to issue, with the lifetime of its token and cookie."""

    session: Session
    ttl: timedelta
    profile: Profile | None = None


@dataclass(frozen=True)
class Identity:
    """A verified session with its account and profile freshly loaded."""

    session: Session
    account: Account
    profile: Profile | None = None


def open_account_session(account: Account) -> SessionGrant:
    """Session issued right after signup."""
    return SessionGrant(session=AccountSession(account_id=account.id), ttl=LOGIN_TOKEN_TTL)


async def start_session(db: AsyncSession, account: Account) -> SessionGrant:
    """
    Session issued after a successful login.

    If the account has a default profile it is selected immediately, otherwise
    the caller lands without a profile and must create or pick one.
    """
    profile = await profile_service.get_default_profile(db, account.id)
    if profile is None:
        return open_account_session(account)

    logger.debug("Auto-selected profile %s for account %s", profile.id, account.id)
    return SessionGrant(
        session=ProfileSession(account_id=account.id, profile_id=profile.id),
        ttl=LOGIN_TOKEN_TTL,
        profile=profile,
    )


async def switch_profile(
    db: AsyncSession,
    session: Session,
    profile_id: UUID,
) -> SessionGrant:
    """
    Select a profile owned by the session's account.

    Ownership is verified here, at switch time. Later requests only look the
    profile up by id.

    Raises:
        NotFoundError: If the profile does not exist or belongs to another
            account. The two cases are not distinguished.
    """
    profile = await profile_service.find_profile(db, profile_id)
    if not owns(session, profile):
        raise NotFoundError("Profile not found for this user")
    return select_profile(session, profile)


def select_profile(session: Session, profile: Profile) -> SessionGrant:
    """Session issued when the caller selects (or has just created) a profile."""
    return SessionGrant(
        session=ProfileSession(account_id=session.account_id, profile_id=profile.id),
        ttl=PROFILE_SELECTION_TOKEN_TTL,
        profile=profile,
    )


def after_profile_deleted(session: Session, profile_id: UUID) -> SessionGrant | None:
    """
    Downgrade the session if it had the deleted profile selected.

    Returns None when the session is unaffected and the cookie can stay as is.
    """
    match session:
        case ProfileSession(profile_id=selected) if selected == profile_id:
            return SessionGrant(
                session=AccountSession(account_id=session.account_id),
                ttl=LOGIN_TOKEN_TTL,
            )
        case _:
            return None


async def resolve_identity(db: AsyncSession, session: Session) -> Identity:
    """
    Reload the session's account and profile from the store.

    Nothing embedded in the token is trusted beyond the ids, so renames and
    deletions are reflected immediately.

    Raises:
        NotFoundError: If the account no longer exists, or the selected profile
            no longer exists or is not owned by the account.
    """
    account = await account_service.get_account(db, session.account_id)
    if account is None:
        raise NotFoundError("User not found")

    match session:
        case ProfileSession(profile_id=profile_id):
            profile = await profile_service.find_profile(db, profile_id)
            if not owns(session, profile):
                raise NotFoundError("Profile not found")
            return Identity(session=session, account=account, profile=profile)
        case AccountSession():
            return Identity(session=session, account=account)


def require_profile(identity: Identity) -> Profile:
    """
    Return the identity's selected profile.

    Raises:
        ValidationError: If the session has no profile selected.
    """
    if identity.profile is None:
        raise ValidationError("Profile selection required", field="profileId")
    return identity.profile
