# =============================================================================
# core/models/post.py - Post Schemas
# =============================================================================
# These models define the API contract for post operations:
# - PostDocument: the stored post record
# - PostWrite: body of POST /posts/post and PUT /posts/{id}
# - PostResponse: a post with its creator joined (or the raw creator id)
# - PostList / PostMessage: response envelopes
# =============================================================================

from typing import Annotated

from pydantic import Field, StringConstraints

from .common import DocumentModel, NonEmptyStr, ObjectIdStr, UtcDatetime

POST_BODY_MIN_LENGTH = 10


class CreatorSummary(DocumentModel):
    """The creator fields joined into posts and comments."""

    id: ObjectIdStr = Field(..., alias="_id")
    name: str


class PostDocument(DocumentModel):
    """
    A post as stored in the `posts` collection.

    `creator` never changes after creation. `comments` mirrors the set of
    comments whose `post` field points here.
    """

    id: ObjectIdStr = Field(..., alias="_id")
    title: str
    post: str
    creator: ObjectIdStr
    comments: list[ObjectIdStr] = Field(default_factory=list)
    created_at: UtcDatetime | None = Field(default=None, alias="createdAt")
    updated_at: UtcDatetime | None = Field(default=None, alias="updatedAt")


class PostWrite(DocumentModel):
    """
    Request body for creating or editing a post.

    Example:
        {"title": "Gratitude", "post": "A career is what you do...", "userId": "6457f3e1..."}
    """

    title: NonEmptyStr = Field(..., description="Post title")
    post: Annotated[
        str,
        StringConstraints(strip_whitespace=True, min_length=POST_BODY_MIN_LENGTH),
    ] = Field(..., description="Post body, at least 10 characters")
    user_id: NonEmptyStr = Field(..., alias="userId", description="Id of the acting user")


class PostResponse(DocumentModel):
    """
    A post as returned to clients.

    `creator` is a {_id, name} summary on reads, the bare creator id on
    writes, and null when the creating user no longer exists.
    """

    id: ObjectIdStr = Field(..., alias="_id")
    title: str
    post: str
    creator: CreatorSummary | ObjectIdStr | None = None
    comments: list[ObjectIdStr] = Field(default_factory=list)
    created_at: UtcDatetime | None = Field(default=None, alias="createdAt")
    updated_at: UtcDatetime | None = Field(default=None, alias="updatedAt")


class PostList(DocumentModel):
    """Response of GET /posts."""

    posts: list[PostResponse] = Field(default_factory=list)
    sent_posts: int = Field(default=0, ge=0, alias="sentPosts")
    current_page: int = Field(default=1, ge=1, alias="currentPage")
    total_posts: int = Field(default=0, ge=0, alias="totalPosts")


class PostMessage(DocumentModel):
    """Response of post create/edit/delete."""

    message: str
    post: PostResponse
