# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .user_service import UserService
from .post_service import PostService
from .comment_service import CommentService

__all__ = [
    "AuthService",
    "UserService",
    "PostService",
    "CommentService",
]
