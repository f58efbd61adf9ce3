# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Tests replace get_store through app.dependency_overrides.
# =============================================================================

import logging
import threading
from typing import Annotated

from fastapi import Depends

from app.config import Settings, get_settings
from core.services import AuthService, CommentService, PostService, UserService
from lib.document_store import DocumentStore

logger = logging.getLogger(__name__)

# Process-wide store, created on first use or by the app lifespan
_store: DocumentStore | None = None
_store_lock = threading.Lock()


def get_store() -> DocumentStore:
    """
    Get the shared DocumentStore instance.

    Built from settings on first call and reused afterwards. Sync handlers
    run in a thread pool, so creation happens under a lock.
    """
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                settings = get_settings()
                _store = DocumentStore.from_url(
                    settings.MONGODB_URL,
                    settings.MONGODB_DATABASE,
                    use_transactions=settings.MONGODB_TRANSACTIONS,
                )
    return _store


def close_store() -> None:
    """Close the shared store, if one was created."""
    global _store
    with _store_lock:
        if _store is not None:
            _store.close()
            _store = None


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreDep = Annotated[DocumentStore, Depends(get_store)]


def get_auth_service(store: StoreDep, settings: SettingsDep) -> AuthService:
    return AuthService(store, settings)


def get_user_service(store: StoreDep) -> UserService:
    return UserService(store)


def get_post_service(store: StoreDep) -> PostService:
    return PostService(store)


def get_comment_service(store: StoreDep) -> CommentService:
    return CommentService(store)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
