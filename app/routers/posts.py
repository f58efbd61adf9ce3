# =============================================================================
# app/routers/posts.py - Post CRUD Endpoints
# =============================================================================
# All endpoints require authentication (enforced where the router is mounted).
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.dependencies import PostServiceDep, SettingsDep
from core.models.post import PostList, PostMessage, PostResponse, PostWrite
from lib.utils import parse_positive_int

router = APIRouter()

PostIdPath = Annotated[str, Path(description="Post id")]


@router.get("", response_model=PostList)
def list_posts(
    service: PostServiceDep,
    settings: SettingsDep,
    page: Annotated[str | None, Query(description="Page number (default 1)")] = None,
    limit: Annotated[str | None, Query(description="Posts per page (default 10)")] = None,
):
    """
    List posts with pagination.

    Missing or non-numeric page/limit values fall back to the defaults.
    """
    return service.list_posts(
        page=parse_positive_int(page, settings.DEFAULT_PAGE),
        limit=parse_positive_int(limit, settings.DEFAULT_PAGE_SIZE),
    )


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: PostIdPath, service: PostServiceDep):
    """Get a single post with its creator's name."""
    return service.get_post(post_id)


@router.post("/post", response_model=PostMessage, status_code=status.HTTP_201_CREATED)
def create_post(request: PostWrite, service: PostServiceDep):
    """
    Create a post.

    The creator is the `userId` in the body; it must name an existing user.
    """
    post = service.create_post(request)
    return PostMessage(message="Post created successfully!", post=post)


@router.put("/{post_id}", response_model=PostMessage)
def update_post(post_id: PostIdPath, request: PostWrite, service: PostServiceDep):
    """
    Edit a post's title and body.

    Only allowed when the body's `userId` equals the post's creator.
    """
    post = service.update_post(post_id, request)
    return PostMessage(message="Post edited successfully", post=post)


@router.delete("/{post_id}", response_model=PostMessage)
def delete_post(post_id: PostIdPath, service: PostServiceDep):
    """
    Delete a post together with its comments.
    """
    post = service.delete_post(post_id)
    return PostMessage(message="Post deleted successfully", post=post)
