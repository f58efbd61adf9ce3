# =============================================================================
# app/routers/comments.py - Comment CRUD Endpoints
# =============================================================================
# All endpoints require authentication (enforced where the router is mounted).
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.dependencies import CommentServiceDep, SettingsDep
from core.models.comment import CommentCreate, CommentList, CommentMessage, CommentUpdate
from lib.utils import parse_positive_int

router = APIRouter()

CommentIdPath = Annotated[str, Path(description="Comment id")]


@router.get("/{post_id}", response_model=CommentList)
def list_comments(
    post_id: Annotated[str, Path(description="Post id")],
    service: CommentServiceDep,
    settings: SettingsDep,
    page: Annotated[str | None, Query(description="Page number (default 1)")] = None,
    limit: Annotated[str | None, Query(description="Comments per page (default 10)")] = None,
):
    """List a post's comments with pagination."""
    return service.list_comments(
        post_id,
        page=parse_positive_int(page, settings.DEFAULT_PAGE),
        limit=parse_positive_int(limit, settings.DEFAULT_PAGE_SIZE),
    )


@router.post("/post", response_model=CommentMessage, status_code=status.HTTP_201_CREATED)
def create_comment(request: CommentCreate, service: CommentServiceDep):
    """Comment on a post as `userId`."""
    comment = service.create_comment(request)
    return CommentMessage(message="New comment created", comment=comment)


@router.put("/{comment_id}", response_model=CommentMessage)
def update_comment(comment_id: CommentIdPath, request: CommentUpdate, service: CommentServiceDep):
    """Replace a comment's text."""
    comment = service.update_comment(comment_id, request)
    return CommentMessage(message="Comment edited successfully!", comment=comment)


@router.delete("/{comment_id}", response_model=CommentMessage)
def delete_comment(comment_id: CommentIdPath, service: CommentServiceDep):
    """Delete a comment and unlink it from its creator and post."""
    comment = service.delete_comment(comment_id)
    return CommentMessage(message="Comment deleted successfully!", comment=comment)
