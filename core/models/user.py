# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# - UserDocument: the stored user record (includes the password hash)
# - PostSummary: a post joined into a user profile (title + body only)
# - UserProfile: GET /users/{id} response (no password, posts joined)
# =============================================================================

from pydantic import Field

from .common import DocumentModel, ObjectIdStr, UtcDatetime


class UserDocument(DocumentModel):
    """
    A user as stored in the `users` collection.

    `posts` and `comments` hold the ids of everything the user created,
    in creation order.
    """

    id: ObjectIdStr = Field(..., alias="_id")
    name: str
    email: str
    password: str = Field(..., description="bcrypt hash, never returned by the API")
    posts: list[ObjectIdStr] = Field(default_factory=list)
    comments: list[ObjectIdStr] = Field(default_factory=list)
    created_at: UtcDatetime | None = Field(default=None, alias="createdAt")
    updated_at: UtcDatetime | None = Field(default=None, alias="updatedAt")


class PostSummary(DocumentModel):
    """Post fields included when a user's posts are joined."""

    id: ObjectIdStr = Field(..., alias="_id")
    title: str
    post: str


class UserProfile(DocumentModel):
    """
    Public view of a user.

    Example:
        {
            "_id": "6457f3e164e3d6902b4077f9",
            "name": "Adam Grant",
            "email": "adam@example.com",
            "posts": [{"_id": "645b...", "title": "Gratitude", "post": "..."}],
            "comments": ["645c..."],
            "createdAt": "2023-05-07T19:06:10.289000Z",
            "updatedAt": "2023-05-07T19:06:10.289000Z"
        }
    """

    id: ObjectIdStr = Field(..., alias="_id")
    name: str
    email: str
    posts: list[PostSummary] = Field(default_factory=list)
    comments: list[ObjectIdStr] = Field(default_factory=list)
    created_at: UtcDatetime | None = Field(default=None, alias="createdAt")
    updated_at: UtcDatetime | None = Field(default=None, alias="updatedAt")
