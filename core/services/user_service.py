# =============================================================================
# core/services/user_service.py - User Profile Reads
# =============================================================================

import logging

from app.exceptions import UserNotFoundError
from core.models.user import PostSummary, UserProfile
from lib.document_store import POSTS, USERS, DocumentStore

logger = logging.getLogger(__name__)


class UserService:
    """Service for reading user profiles."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def get_profile(self, user_id: str) -> UserProfile:
        """
        Get a user without the password hash, with owned posts joined.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        user = self.store.find_by_id(USERS, user_id, projection={"password": 0})
        if not user:
            raise UserNotFoundError()

        posts = self.store.find_by_ids(
            POSTS,
            user.get("posts", []),
            projection={"title": 1, "post": 1},
        )
        user["posts"] = [PostSummary.model_validate(post) for post in posts]

        return UserProfile.model_validate(user)
