"""One-way password hashing with bcrypt."""
import bcrypt

BCRYPT_ROUNDS = 10

# bcrypt only reads this many bytes of input; longer passwords are rejected
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Compare a plaintext password against a stored bcrypt hash.

    A malformed stored hash compares as a mismatch rather than raising, so a
    corrupt record cannot be distinguished from a wrong password by callers.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
