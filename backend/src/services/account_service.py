"""Service layer for account signup and credential checks."""
import logging
import random
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.limits import DEFAULT_AVATARS
from core.passwords import hash_password, verify_password
from models.account import Account
from schemas.account import LoginRequest, SignupRequest
from schemas.validators import require_fields, validate_email, validate_new_password
from services.exceptions import InvalidCredentialsError, ValidationError

logger = logging.getLogger(__name__)


async def get_account(db: AsyncSession, account_id: UUID) -> Account | None:
    """Get an account by ID."""
    return await db.get(Account, account_id)


async def get_account_by_email(db: AsyncSession, email: str) -> Account | None:
    """Get an account by its (normalized) email."""
    result = await db.execute(select(Account).where(Account.email == email))
    return result.scalar_one_or_none()


async def get_account_by_username(db: AsyncSession, username: str) -> Account | None:
    """Get an account by username."""
    result = await db.execute(select(Account).where(Account.username == username))
    return result.scalar_one_or_none()


async def create_account(db: AsyncSession, data: SignupRequest) -> Account:
    """
    Create a new account with a hashed password and a random default avatar.

    Raises:
        ValidationError: If a field is missing or malformed, or the email or
            username is already taken.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    require_fields(email=data.email, username=data.username, password=data.password)
    email = validate_email(data.email)
    password = validate_new_password(data.password)
    username = data.username.strip()

    if await get_account_by_email(db, email) is not None:
        raise ValidationError("Email already exists", field="email")
    if await get_account_by_username(db, username) is not None:
        raise ValidationError("Username already exists", field="username")

    account = Account(
        email=email,
        username=username,
        password_hash=hash_password(password),
        image=random.choice(DEFAULT_AVATARS),
    )
    db.add(account)
    try:
        await db.flush()
    except IntegrityError as e:
        # Lost a race with a concurrent signup between the lookups and the insert
        await db.rollback()
        raise ValidationError("Email or username already exists", field="email") from e

    logger.info("Account created: %s", account.id)
    return account


async def authenticate(db: AsyncSession, data: LoginRequest) -> Account:
    """
    Check an email/password pair.

    Raises:
        ValidationError: If either field is missing.
        InvalidCredentialsError: If the email is unknown or the password is wrong.
    """
    require_fields(email=data.email, password=data.password)
    account = await get_account_by_email(db, data.email.strip().lower())

    if account is None or not verify_password(data.password, account.password_hash):
        logger.info("Login rejected: invalid credentials")
        raise InvalidCredentialsError()

    logger.info("Login succeeded: %s", account.id)
    return account
