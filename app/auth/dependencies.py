# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# The request gate for every protected router.
#
# Reads the raw Authorization header ("Bearer <token>"), verifies the HS256
# signature and expiry with the configured secret, and exposes the token's
# userId to the handler. Every failure is a 401.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, Header, Request
from pydantic import ValidationError

from app.auth.models import AuthUser, TokenPayload
from app.config import Settings, get_settings
from app.exceptions import UnauthenticatedError
from lib.security import TokenError, decode_access_token

logger = logging.getLogger(__name__)


def extract_token(authorization: Optional[str]) -> str:
    """
    Pull the token segment out of an Authorization header value.

    Raises:
        UnauthenticatedError: If the header is missing or has no token part
    """
    if not authorization:
        raise UnauthenticatedError("Authorization header missing!")

    parts = authorization.split()
    if len(parts) < 2:
        raise UnauthenticatedError("Token missing!")

    return parts[1]


def verify_token(token: str, settings: Settings) -> AuthUser:
    """
    Verify a bearer token and return the identity it carries.

    Raises:
        UnauthenticatedError: If the signature, expiry or claims are invalid
    """
    try:
        claims = decode_access_token(token, settings.JWT_SECRET, settings.JWT_ALGORITHM)
        payload = TokenPayload.model_validate(claims)
    except TokenError as e:
        logger.warning(f"Token rejected: {e.message}")
        raise UnauthenticatedError("Token has expired" if e.expired else "Invalid token")
    except ValidationError:
        logger.warning("Token rejected: missing email/userId claims")
        raise UnauthenticatedError("Invalid token")

    return AuthUser(id=payload.user_id, email=payload.email)


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> AuthUser:
    """
    Extract and validate the user from the bearer token.

    This dependency:
    1. Reads the Authorization header
    2. Verifies the JWT signature and expiry
    3. Stores the user id on request.state.user_id
    4. Returns an AuthUser with the user's ID and email

    Raises:
        UnauthenticatedError: 401 if the header or token is missing or invalid
    """
    token = extract_token(authorization)
    user = verify_token(token, settings)

    request.state.user_id = user.id
    logger.debug(f"Authenticated user: {user.id}")
    return user
