# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup and login. These are the only business routes that don't require
# a bearer token.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, LoginRequest, LoginResponse, SignupRequest, SignupResponse
from app.dependencies import AuthServiceDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(request: SignupRequest, service: AuthServiceDep) -> SignupResponse:
    """
    Create a new user and return a bearer token.

    Raises:
        400: If the body fails validation
        403: If the email is already registered
    """
    return service.signup(request)


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, service: AuthServiceDep) -> LoginResponse:
    """
    Exchange email and password for a bearer token.

    Raises:
        400: If the body fails validation
        401: If the password is wrong
        404: If no user has this email
    """
    return service.login(request)


@router.get("/verify")
async def verify(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "userId": user.id,
        "email": user.email,
    }
