# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the HTTP routes:
# - models/: Pydantic schemas for stored documents, request bodies and responses
# - services/: Auth, user, post and comment operations, including the
#   cross-collection bookkeeping done on create and delete
#
# Services talk to MongoDB only through lib.document_store.DocumentStore and
# raise the typed errors from app.exceptions.
# =============================================================================
