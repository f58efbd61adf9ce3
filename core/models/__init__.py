# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for the three collections:
# - common.py: shared field types and the DocumentModel base
# - user.py: stored user record and the public profile
# - post.py: stored post record, write body and response envelopes
# - comment.py: stored comment record, write bodies and response envelopes
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import DocumentModel, NonEmptyStr, ObjectIdStr, UtcDatetime

# -----------------------------------------------------------------------------
# User Models
# -----------------------------------------------------------------------------
from .user import PostSummary, UserDocument, UserProfile

# -----------------------------------------------------------------------------
# Post Models
# -----------------------------------------------------------------------------
from .post import (
    POST_BODY_MIN_LENGTH,
    CreatorSummary,
    PostDocument,
    PostList,
    PostMessage,
    PostResponse,
    PostWrite,
)

# -----------------------------------------------------------------------------
# Comment Models
# -----------------------------------------------------------------------------
from .comment import (
    CommentCreate,
    CommentDocument,
    CommentList,
    CommentMessage,
    CommentResponse,
    CommentUpdate,
)

__all__ = [
    # Common
    "DocumentModel",
    "NonEmptyStr",
    "ObjectIdStr",
    "UtcDatetime",
    # User
    "PostSummary",
    "UserDocument",
    "UserProfile",
    # Post
    "POST_BODY_MIN_LENGTH",
    "CreatorSummary",
    "PostDocument",
    "PostList",
    "PostMessage",
    "PostResponse",
    "PostWrite",
    # Comment
    "CommentCreate",
    "CommentDocument",
    "CommentList",
    "CommentMessage",
    "CommentResponse",
    "CommentUpdate",
]
