# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: User profile reads
# - posts.py: Post CRUD
# - comments.py: Comment CRUD
#
# Each router is mounted in main.py with a URL prefix. users, posts and
# comments are mounted behind the bearer-token gate.
# =============================================================================

from . import health
from . import users
from . import posts
from . import comments

__all__ = [
    "health",
    "users",
    "posts",
    "comments",
]
