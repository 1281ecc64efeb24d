"""Ownership predicate shared by every account-scoped resource check."""
from typing import Protocol
from uuid import UUID

from core.tokens import AccountSession, ProfileSession


class AccountOwned(Protocol):
    """Anything stored under an account: profiles, checkpoints, history entries."""

    account_id: UUID


class HasSession(Protocol):
    """A resolved request identity carrying the decoded session."""

    session: AccountSession | ProfileSession


def owns(
    principal: UUID | AccountSession | ProfileSession | HasSession,
    resource: AccountOwned | None,
) -> bool:
    """
    Return True if the principal's account owns the resource.

    The principal may be a bare account id, a decoded session, or a resolved
    identity. A missing resource is never owned.
    """
    if resource is None:
        return False
    match principal:
        case UUID():
            account_id = principal
        case AccountSession(account_id=account_id) | ProfileSession(account_id=account_id):
            pass
        case _:
            account_id = principal.session.account_id
    return resource.account_id == account_id
