# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from core.models.common import DocumentModel, NonEmptyStr

PASSWORD_MIN_LENGTH = 8

Password = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=PASSWORD_MIN_LENGTH),
]


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a verified bearer token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    id: str
    email: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class TokenPayload(BaseModel):
    """
    Decoded claims of a token issued at signup/login.
    """
    email: str
    user_id: str = Field(..., alias="userId")
    exp: int  # Expiration timestamp
    iat: Optional[int] = None  # Issued at timestamp

    model_config = ConfigDict(populate_by_name=True)


class _Credentials(DocumentModel):
    email: EmailStr
    password: Password

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class SignupRequest(_Credentials):
    """
    Request body for POST /auth/signup.

    Example:
        {"name": "Adam Grant", "email": "adam@example.com", "password": "password1"}
    """
    name: NonEmptyStr


class LoginRequest(_Credentials):
    """Request body for POST /auth/login."""


class SignupResponse(DocumentModel):
    message: str = "New user created"
    token: str
    user_id: str = Field(..., alias="userId")


class LoginResponse(DocumentModel):
    token: str
    user_id: str = Field(..., alias="userId")
