# =============================================================================
# lib/security.py - Password Hashing and Bearer Tokens
# =============================================================================
# Pure helpers with no settings lookups: callers pass the secret, algorithm,
# cost factor and lifetime explicitly.
#
# - hash_password / verify_password: bcrypt
# - create_access_token / decode_access_token: HMAC-signed JWT (python-jose)
# =============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt


class TokenError(Exception):
    """Raised when a bearer token cannot be verified."""

    def __init__(self, message: str, expired: bool = False):
        super().__init__(message)
        self.message = message
        self.expired = expired


# =============================================================================
# Passwords
# =============================================================================

# bcrypt only looks at the first 72 bytes; newer releases reject longer input.
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# =============================================================================
# Tokens
# =============================================================================

def create_access_token(
    claims: dict[str, Any],
    secret: str,
    algorithm: str = "HS256",
    expires_in: timedelta = timedelta(hours=4),
    now: datetime | None = None,
) -> str:
    """
    Sign `claims` into a JWT that expires `expires_in` after `now`.

    Example:
        token = create_access_token(
            {"email": "ada@example.com", "userId": "645b819d7871e6315ead0f79"},
            secret=settings.JWT_SECRET,
        )
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iat"] = int(issued_at.timestamp())
    payload["exp"] = int((issued_at + expires_in).timestamp())
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    """
    Verify the signature and expiry of `token` and return its claims.

    Raises:
        TokenError: If the token is expired, malformed or signed with another key
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError as e:
        raise TokenError("Token has expired", expired=True) from e
    except JWTError as e:
        raise TokenError(f"Invalid token: {e}") from e
