# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Blog API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.auth import get_current_user
from app.auth import routes as auth_routes
from app.config import settings
from app.dependencies import close_store, get_store
from app.exceptions import (
    BlogApiException,
    blog_api_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import comments, health, posts, users
from lib.document_store import DocumentStoreError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: open the document store and make sure indexes exist
    - Shutdown: close the document store
    """
    logger.info(f"Starting Blog API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    store = app.dependency_overrides.get(get_store, get_store)()
    try:
        store.ensure_indexes()
    except DocumentStoreError as e:
        # The API can still start; requests will fail until MongoDB is reachable
        logger.error(f"Could not ensure indexes: {e}")

    yield

    logger.info("Shutting down Blog API")
    close_store()


# Create FastAPI application
app = FastAPI(
    title="Blog API",
    description="""
## Blog Backend

Users sign up and log in, write posts and comment on posts.

### Authentication

`POST /auth/signup` and `POST /auth/login` return a bearer token valid for
4 hours. Every `/users`, `/posts` and `/comments` route requires

```
Authorization: Bearer <token>
```

### Errors

Errors are returned as `{"message": "...", "data": ...}`; `data` carries
field errors for `400` validation failures.
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Signup, login and token verification"},
        {"name": "Users", "description": "User profiles"},
        {"name": "Posts", "description": "Create, read, edit and delete posts"},
        {"name": "Comments", "description": "Comment on posts"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(BlogApiException, blog_api_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

# Signup / login (no token required)
app.include_router(
    auth_routes.router,
    prefix="/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    tags=["Health"]
)

# Everything below sits behind the bearer-token gate
protected = [Depends(get_current_user)]

app.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
    dependencies=protected,
)

app.include_router(
    posts.router,
    prefix="/posts",
    tags=["Posts"],
    dependencies=protected,
)

app.include_router(
    comments.router,
    prefix="/comments",
    tags=["Comments"],
    dependencies=protected,
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Blog API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )
