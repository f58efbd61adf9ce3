# =============================================================================
# core/services/comment_service.py - Comment Business Logic
# =============================================================================
# Handles comment CRUD. A comment's id is kept in two places besides the
# comment itself: its creator's `comments` and its post's `comments`.
# =============================================================================

import logging
from typing import Any

from app.exceptions import CommentNotFoundError, PostNotFoundError, UserNotFoundError
from core.models.comment import (
    CommentCreate,
    CommentDocument,
    CommentList,
    CommentResponse,
    CommentUpdate,
)
from core.services.post_service import attach_creators
from lib.document_store import COMMENTS, POSTS, USERS, DocumentStore
from lib.utils import page_offset, utc_now

logger = logging.getLogger(__name__)


def stored_comment_response(document: dict[str, Any]) -> CommentResponse:
    """Check a written comment against CommentDocument and shape it for clients."""
    stored = CommentDocument.model_validate(document)
    return CommentResponse.model_validate(stored.model_dump(by_alias=True))


class CommentService:
    """Service for comment operations."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def list_comments(self, post_id: str, page: int, limit: int) -> CommentList:
        """
        List one page of a post's comments, in insertion order, with
        creators joined.

        Raises:
            PostNotFoundError: If the post doesn't exist
        """
        post = self.store.find_by_id(POSTS, post_id, projection={"_id": 1})
        if not post:
            raise PostNotFoundError("Post not found")

        query = {"post": post["_id"]}
        total = self.store.count(COMMENTS, query)
        comments = self.store.find(COMMENTS, query, skip=page_offset(page, limit), limit=limit)

        return CommentList(
            comments=[
                CommentResponse.model_validate(c) for c in attach_creators(self.store, comments)
            ],
            sent_comments=len(comments),
            current_page=page,
            total_comments=total,
        )

    def create_comment(self, request: CommentCreate) -> CommentResponse:
        """
        Create a comment and link it from its creator and its post.

        Raises:
            UserNotFoundError: If the user doesn't exist
            PostNotFoundError: If the post doesn't exist
        """
        user = self.store.find_by_id(USERS, request.user_id, projection={"_id": 1})
        if not user:
            raise UserNotFoundError("Invalid user ID!")

        post = self.store.find_by_id(POSTS, request.post_id, projection={"_id": 1})
        if not post:
            raise PostNotFoundError("Invalid post ID!")

        now = utc_now()
        document = {
            "comment": request.comment,
            "creator": user["_id"],
            "post": post["_id"],
            "createdAt": now,
            "updatedAt": now,
        }

        with self.store.transaction() as session:
            comment = self.store.insert(COMMENTS, document, session=session)
            link = {"comments": comment["_id"]}
            self.store.update(USERS, user["_id"], push=link, set_fields={"updatedAt": now}, session=session)
            self.store.update(POSTS, post["_id"], push=link, set_fields={"updatedAt": now}, session=session)

        logger.info(f"Created comment: {comment['_id']} on post: {post['_id']}")
        return stored_comment_response(comment)

    def update_comment(self, comment_id: str, request: CommentUpdate) -> CommentResponse:
        """
        Overwrite a comment's text.

        Anyone holding the comment id may edit it; no ownership check.

        Raises:
            CommentNotFoundError: If the comment doesn't exist
        """
        updated = self.store.update(
            COMMENTS,
            comment_id,
            set_fields={"comment": request.comment, "updatedAt": utc_now()},
        )
        if not updated:
            raise CommentNotFoundError("Comment not found")

        logger.info(f"Updated comment: {comment_id}")
        return stored_comment_response(updated)

    def delete_comment(self, comment_id: str) -> CommentResponse:
        """
        Delete a comment and unlink it from its creator and its post.

        Returns:
            The deleted comment

        Raises:
            CommentNotFoundError: If the comment doesn't exist
        """
        comment = self.store.find_by_id(COMMENTS, comment_id)
        if not comment:
            raise CommentNotFoundError("Comment to delete not found!")

        with self.store.transaction() as session:
            link = {"comments": comment["_id"]}
            self.store.update(USERS, comment["creator"], pull=link, session=session)
            self.store.update(POSTS, comment["post"], pull=link, session=session)
            deleted = self.store.delete(COMMENTS, comment["_id"], session=session)

        if not deleted:
            raise CommentNotFoundError("Comment to delete not found!")

        logger.info(f"Deleted comment: {comment_id}")
        return stored_comment_response(deleted)
