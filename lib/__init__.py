# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - document_store.py: Typed pymongo wrapper for document operations
# - security.py: bcrypt password hashing and JWT issuance/verification
# - utils.py: Shared utilities (query string parsing, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.document_store import (
    COMMENTS,
    POSTS,
    USERS,
    DocumentStore,
    DocumentStoreError,
    DuplicateDocumentError,
)
from lib.security import (
    TokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from lib.utils import page_offset, parse_positive_int, utc_now

__all__ = [
    # Document store
    "COMMENTS",
    "POSTS",
    "USERS",
    "DocumentStore",
    "DocumentStoreError",
    "DuplicateDocumentError",
    # Security
    "TokenError",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
    # Utils
    "page_offset",
    "parse_positive_int",
    "utc_now",
]
