# =============================================================================
# core/services/post_service.py - Post Business Logic
# =============================================================================
# Handles post CRUD and keeps the linked collections consistent:
# - create: the new post id is appended to its creator's `posts`
# - delete: the post leaves its creator's `posts`, its comments are deleted
#   and their ids leave each commenter's `comments`
#
# Multi-document sequences run inside DocumentStore.transaction(), which is
# a real MongoDB transaction only when MONGODB_TRANSACTIONS is enabled.
# =============================================================================

import logging
from typing import Any, Iterable

from app.exceptions import ForbiddenError, PostNotFoundError, UserNotFoundError
from core.models.post import CreatorSummary, PostDocument, PostList, PostResponse, PostWrite
from lib.document_store import COMMENTS, POSTS, USERS, DocumentStore
from lib.utils import page_offset, utc_now

logger = logging.getLogger(__name__)


def attach_creators(store: DocumentStore, documents: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Replace each document's `creator` id with a {_id, name} summary.

    One lookup covers all distinct creators. A creator that no longer
    exists becomes None.
    """
    documents = list(documents)
    creator_ids = list(dict.fromkeys(doc["creator"] for doc in documents if doc.get("creator")))
    creators = {
        user["_id"]: CreatorSummary.model_validate(user)
        for user in store.find_by_ids(USERS, creator_ids, projection={"name": 1})
    }
    for doc in documents:
        doc["creator"] = creators.get(doc.get("creator"))
    return documents


def stored_post_response(document: dict[str, Any]) -> PostResponse:
    """
    Shape a post returned by a write for clients.

    The record is checked against PostDocument first, so a write that
    stored a malformed post fails here instead of reaching the client.
    """
    stored = PostDocument.model_validate(document)
    return PostResponse.model_validate(stored.model_dump(by_alias=True))


class PostService:
    """
    Service for post operations.

    Provides a clean interface between API routes and the document store.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    def list_posts(self, page: int, limit: int) -> PostList:
        """
        List one page of posts with creators joined.

        Pages are cut in creation order; the posts within a page are
        returned newest first.

        Args:
            page: Page number (1-indexed)
            limit: Posts per page

        Returns:
            PostList with the page, its size, the page number and the total
        """
        total = self.store.count(POSTS)
        posts = self.store.find(POSTS, skip=page_offset(page, limit), limit=limit)
        posts.reverse()

        return PostList(
            posts=[PostResponse.model_validate(p) for p in attach_creators(self.store, posts)],
            sent_posts=len(posts),
            current_page=page,
            total_posts=total,
        )

    def get_post(self, post_id: str) -> PostResponse:
        """
        Get a post with its creator joined.

        Raises:
            PostNotFoundError: If the post doesn't exist
        """
        post = self.store.find_by_id(POSTS, post_id)
        if not post:
            raise PostNotFoundError("Post not found!")

        [post] = attach_creators(self.store, [post])
        return PostResponse.model_validate(post)

    def create_post(self, request: PostWrite) -> PostResponse:
        """
        Create a post for `request.user_id`.

        Raises:
            UserNotFoundError: If the creator doesn't exist
        """
        user = self.store.find_by_id(USERS, request.user_id, projection={"_id": 1})
        if not user:
            raise UserNotFoundError("Invalid user ID!")

        now = utc_now()
        document = {
            "title": request.title,
            "post": request.post,
            "creator": user["_id"],
            "comments": [],
            "createdAt": now,
            "updatedAt": now,
        }

        with self.store.transaction() as session:
            post = self.store.insert(POSTS, document, session=session)
            self.store.update(
                USERS,
                user["_id"],
                push={"posts": post["_id"]},
                set_fields={"updatedAt": now},
                session=session,
            )

        logger.info(f"Created post: {post['_id']} for user: {user['_id']}")
        return stored_post_response(post)

    def update_post(self, post_id: str, request: PostWrite) -> PostResponse:
        """
        Overwrite a post's title and body.

        Ownership is checked against the `userId` in the request body, not
        the token identity.

        Raises:
            PostNotFoundError: If the post doesn't exist
            ForbiddenError: If `request.user_id` isn't the post's creator
        """
        post = self.store.find_by_id(POSTS, post_id)
        if not post:
            raise PostNotFoundError("Post to be edited not found")

        if request.user_id != str(post["creator"]):
            logger.warning(f"User {request.user_id} tried to edit post {post_id} owned by {post['creator']}")
            raise ForbiddenError("Creator ID didn't match!")

        updated = self.store.update(
            POSTS,
            post["_id"],
            set_fields={
                "title": request.title,
                "post": request.post,
                "updatedAt": utc_now(),
            },
        )
        if not updated:
            raise PostNotFoundError("Post to be edited not found")

        logger.info(f"Updated post: {post_id}")
        return stored_post_response(updated)

    def delete_post(self, post_id: str) -> PostResponse:
        """
        Delete a post and everything hanging off it.

        Steps:
        1. Pull the post id from its creator's `posts`
        2. Pull the post's comment ids from every commenter's `comments`
        3. Delete the post
        4. Delete the post's comments

        The comment ids are read before the post document is deleted.

        Returns:
            The deleted post

        Raises:
            PostNotFoundError: If the post doesn't exist
        """
        post = self.store.find_by_id(POSTS, post_id)
        if not post:
            raise PostNotFoundError("Post to delete not found!")

        with self.store.transaction() as session:
            self.store.update(USERS, post["creator"], pull={"posts": post["_id"]}, session=session)

            comments = self.store.find(
                COMMENTS,
                {"post": post["_id"]},
                projection={"creator": 1},
                session=session,
            )
            comment_ids = list(dict.fromkeys(
                [*post.get("comments", []), *(c["_id"] for c in comments)]
            ))
            commenter_ids = list(dict.fromkeys(c["creator"] for c in comments))
            self.store.update_many_pull(
                USERS, commenter_ids, "comments", comment_ids, session=session
            )

            deleted = self.store.delete(POSTS, post["_id"], session=session)
            removed = self.store.delete_many(COMMENTS, {"post": post["_id"]}, session=session)

        if not deleted:
            raise PostNotFoundError("Post to delete not found!")

        logger.info(f"Deleted post: {post_id} with {removed} comments")
        return stored_post_response(deleted)
