# =============================================================================
# core/services/auth_service.py - Signup / Login
# =============================================================================
# Issues bearer tokens for new and returning users.
# Token verification lives in app.auth.dependencies (the request gate).
# =============================================================================

import logging
from datetime import timedelta

from app.auth.models import LoginRequest, LoginResponse, SignupRequest, SignupResponse
from app.config import Settings
from app.exceptions import ConflictError, UnauthorizedError, UserNotFoundError
from core.models.user import UserDocument
from lib.document_store import USERS, DocumentStore, DuplicateDocumentError
from lib.security import create_access_token, hash_password, verify_password
from lib.utils import utc_now

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service for credential issuance.

    Holds the document store and the settings that carry the signing
    secret, token lifetime and bcrypt cost factor.
    """

    def __init__(self, store: DocumentStore, settings: Settings):
        self.store = store
        self.settings = settings

    def issue_token(self, email: str, user_id: str) -> str:
        """Sign a token carrying {email, userId}."""
        return create_access_token(
            {"email": email, "userId": user_id},
            secret=self.settings.JWT_SECRET,
            algorithm=self.settings.JWT_ALGORITHM,
            expires_in=timedelta(hours=self.settings.ACCESS_TOKEN_EXPIRE_HOURS),
        )

    def signup(self, request: SignupRequest) -> SignupResponse:
        """
        Register a new user.

        Returns:
            SignupResponse with a fresh token and the new user's id

        Raises:
            ConflictError: If a user with this email already exists
        """
        if self.store.find_one(USERS, {"email": request.email}, {"_id": 1}):
            logger.warning(f"Signup rejected, email already registered: {request.email}")
            raise ConflictError()

        now = utc_now()
        document = {
            "name": request.name,
            "email": request.email,
            "password": hash_password(request.password, rounds=self.settings.BCRYPT_ROUNDS),
            "posts": [],
            "comments": [],
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            user = self.store.insert(USERS, document)
        except DuplicateDocumentError:
            # Lost a race with a concurrent signup for the same email
            logger.warning(f"Signup rejected by unique index: {request.email}")
            raise ConflictError()

        user_id = UserDocument.model_validate(user).id
        logger.info(f"Created user: {user_id}")

        return SignupResponse(
            token=self.issue_token(request.email, user_id),
            user_id=user_id,
        )

    def login(self, request: LoginRequest) -> LoginResponse:
        """
        Verify credentials and issue a token.

        Raises:
            UserNotFoundError: If no user has this email
            UnauthorizedError: If the password doesn't match
        """
        user = self.store.find_one(USERS, {"email": request.email}, {"password": 1})
        if not user:
            logger.warning(f"Login for unknown email: {request.email}")
            raise UserNotFoundError("User not found!")

        if not verify_password(request.password, user.get("password", "")):
            logger.warning(f"Wrong password for user: {user['_id']}")
            raise UnauthorizedError("Wrong password!")

        user_id = str(user["_id"])
        logger.info(f"User logged in: {user_id}")

        return LoginResponse(
            token=self.issue_token(request.email, user_id),
            user_id=user_id,
        )
