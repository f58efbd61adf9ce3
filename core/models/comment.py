# =============================================================================
# core/models/comment.py - Comment Schemas
# =============================================================================

from pydantic import Field

from .common import DocumentModel, NonEmptyStr, ObjectIdStr, UtcDatetime
from .post import CreatorSummary


class CommentDocument(DocumentModel):
    """A comment as stored in the `comments` collection."""

    id: ObjectIdStr = Field(..., alias="_id")
    comment: str
    creator: ObjectIdStr
    post: ObjectIdStr
    created_at: UtcDatetime | None = Field(default=None, alias="createdAt")
    updated_at: UtcDatetime | None = Field(default=None, alias="updatedAt")


class CommentCreate(DocumentModel):
    """
    Request body for POST /comments/post.

    Example:
        {"postId": "645b819d...", "userId": "6457f3e1...", "comment": "Well said"}
    """

    post_id: NonEmptyStr = Field(..., alias="postId")
    user_id: NonEmptyStr = Field(..., alias="userId")
    comment: NonEmptyStr


class CommentUpdate(DocumentModel):
    """Request body for PUT /comments/{id}."""

    comment: NonEmptyStr


class CommentResponse(DocumentModel):
    """A comment as returned to clients; `creator` is joined on list reads."""

    id: ObjectIdStr = Field(..., alias="_id")
    comment: str
    creator: CreatorSummary | ObjectIdStr | None = None
    post: ObjectIdStr
    created_at: UtcDatetime | None = Field(default=None, alias="createdAt")
    updated_at: UtcDatetime | None = Field(default=None, alias="updatedAt")


class CommentList(DocumentModel):
    """Response of GET /comments/{postId}."""

    comments: list[CommentResponse] = Field(default_factory=list)
    sent_comments: int = Field(default=0, ge=0, alias="sentComments")
    current_page: int = Field(default=1, ge=1, alias="currentPage")
    total_comments: int = Field(default=0, ge=0, alias="totalComments")


class CommentMessage(DocumentModel):
    """Response of comment create/edit/delete."""

    message: str
    comment: CommentResponse
