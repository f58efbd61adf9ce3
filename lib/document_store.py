# =============================================================================
# lib/document_store.py - MongoDB Document Store Wrapper
# =============================================================================
# This module provides a small typed wrapper around a pymongo database.
# It exposes only the primitives the services need:
# - find by id / find by ids / filtered find with skip and limit
# - count, insert, in-place update ($set / $push / $pull), delete
# - an optional multi-document transaction around a sequence of writes
#
# Ids travel through the services as 24-hex strings; conversion to ObjectId
# happens here and nowhere else.
#
# Usage:
#   from lib.document_store import DocumentStore
#   store = DocumentStore.from_url("mongodb://localhost:27017", "blog")
#   post = store.find_by_id("posts", post_id)
# =============================================================================

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.client_session import ClientSession
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

logger = logging.getLogger(__name__)

USERS = "users"
POSTS = "posts"
COMMENTS = "comments"


class DocumentStoreError(Exception):
    """
    Error during a document store operation.

    Wraps driver failures so callers see which collection and operation
    failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "DOCUMENT_STORE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class DuplicateDocumentError(DocumentStoreError):
    """Raised when an insert violates a unique index."""

    def __init__(self, collection: str, error: str):
        super().__init__(
            message=f"Duplicate document in {collection}: {error}",
            code="DUPLICATE_DOCUMENT",
            details={"collection": collection},
        )


def to_object_id(value: str | ObjectId) -> ObjectId | None:
    """
    Convert a string id to ObjectId.

    Returns None for values that are not valid ObjectIds, so lookups with a
    malformed id behave like lookups of a missing document.
    """
    if isinstance(value, ObjectId):
        return value
    if value is None:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def to_object_ids(values: Iterable[str | ObjectId]) -> list[ObjectId]:
    """Convert many ids, dropping the malformed ones."""
    converted = (to_object_id(value) for value in values)
    return [oid for oid in converted if oid is not None]


class DocumentStore:
    """
    Wrapper for document operations on one MongoDB database.

    One instance is created per process (see app.main lifespan) and shared
    by all requests; pymongo's client is thread-safe and pools connections.

    Example:
        store = DocumentStore.from_url(settings.MONGODB_URL, settings.MONGODB_DATABASE)
        user = store.insert("users", {"name": "Ada", "email": "ada@example.com"})
        store.update("users", user["_id"], push={"posts": post_id})
    """

    def __init__(
        self,
        database: Database,
        client: MongoClient | None = None,
        use_transactions: bool = False,
    ):
        self._db = database
        self._client = client
        self._use_transactions = use_transactions

    @classmethod
    def from_url(
        cls,
        url: str,
        database: str,
        use_transactions: bool = False,
    ) -> "DocumentStore":
        """
        Create a store connected to `url`.

        The connection itself is lazy; the first query opens it.

        Raises:
            DocumentStoreError: If the URL cannot be parsed
        """
        try:
            client = MongoClient(url)
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to create MongoDB client: {e}",
                code="CLIENT_INIT_FAILED",
            ) from e
        logger.info(f"MongoDB client initialized for database '{database}'")
        return cls(client[database], client=client, use_transactions=use_transactions)

    @property
    def database(self) -> Database:
        return self._db

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB client closed")

    # -------------------------------------------------------------------------
    # Setup / Health
    # -------------------------------------------------------------------------

    def ensure_indexes(self) -> None:
        """Create the unique email index and the comment-by-post index."""
        try:
            self._db[USERS].create_index([("email", ASCENDING)], unique=True)
            self._db[COMMENTS].create_index([("post", ASCENDING)])
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to create indexes: {e}",
                code="INDEX_FAILED",
            ) from e

    def ping(self) -> bool:
        """Return True when the server answers a ping."""
        try:
            self._db.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[ClientSession | None]:
        """
        Group a sequence of writes.

        With transactions enabled this yields a session bound to a MongoDB
        transaction that commits on exit and aborts on error. Otherwise it
        yields None and every write commits on its own.
        """
        if not self._use_transactions or self._client is None:
            yield None
            return

        with self._client.start_session() as session:
            with session.start_transaction():
                yield session

    @staticmethod
    def _session_kwargs(session: ClientSession | None) -> dict[str, Any]:
        return {"session": session} if session is not None else {}

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_by_id(
        self,
        collection: str,
        document_id: str | ObjectId,
        projection: dict[str, Any] | None = None,
        session: ClientSession | None = None,
    ) -> dict[str, Any] | None:
        """
        Fetch one document by id.

        Returns:
            The document, or None if it doesn't exist or the id is malformed
        """
        oid = to_object_id(document_id)
        if oid is None:
            logger.debug(f"Malformed id for {collection}: {document_id!r}")
            return None

        try:
            return self._db[collection].find_one(
                {"_id": oid}, projection, **self._session_kwargs(session)
            )
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to fetch {collection} document: {e}",
                code="FIND_FAILED",
                details={"collection": collection, "id": str(document_id)},
            ) from e

    def find_one(
        self,
        collection: str,
        filter: dict[str, Any],
        projection: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Fetch the first document matching `filter`."""
        try:
            return self._db[collection].find_one(filter, projection)
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to fetch {collection} document: {e}",
                code="FIND_FAILED",
                details={"collection": collection},
            ) from e

    def find_by_ids(
        self,
        collection: str,
        document_ids: Iterable[str | ObjectId],
        projection: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch many documents by id, preserving the order of `document_ids`.

        Unknown ids are skipped.
        """
        oids = to_object_ids(document_ids)
        if not oids:
            return []

        try:
            found = {
                doc["_id"]: doc
                for doc in self._db[collection].find({"_id": {"$in": oids}}, projection)
            }
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to fetch {collection} documents: {e}",
                code="FIND_FAILED",
                details={"collection": collection, "count": len(oids)},
            ) from e

        return [found[oid] for oid in oids if oid in found]

    def find(
        self,
        collection: str,
        filter: dict[str, Any] | None = None,
        skip: int = 0,
        limit: int = 0,
        sort: list[tuple[str, int]] | None = None,
        projection: dict[str, Any] | None = None,
        session: ClientSession | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch documents matching `filter`.

        Args:
            skip: Number of matching documents to skip
            limit: Maximum number to return (0 means no limit)
            sort: Sort specification; defaults to insertion order (_id ascending)
        """
        try:
            cursor = self._db[collection].find(
                filter or {}, projection, **self._session_kwargs(session)
            )
            cursor = cursor.sort(sort or [("_id", ASCENDING)])
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            return list(cursor)
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to query {collection}: {e}",
                code="FIND_FAILED",
                details={"collection": collection, "skip": skip, "limit": limit},
            ) from e

    def count(self, collection: str, filter: dict[str, Any] | None = None) -> int:
        try:
            return self._db[collection].count_documents(filter or {})
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to count {collection}: {e}",
                code="COUNT_FAILED",
                details={"collection": collection},
            ) from e

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(
        self,
        collection: str,
        document: dict[str, Any],
        session: ClientSession | None = None,
    ) -> dict[str, Any]:
        """
        Insert a document.

        Returns:
            The stored document including its generated `_id`

        Raises:
            DuplicateDocumentError: If a unique index rejects the document
            DocumentStoreError: If the insert fails for any other reason
        """
        document = dict(document)
        try:
            result = self._db[collection].insert_one(document, **self._session_kwargs(session))
        except DuplicateKeyError as e:
            raise DuplicateDocumentError(collection, str(e)) from e
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to insert into {collection}: {e}",
                code="INSERT_FAILED",
                details={"collection": collection},
            ) from e

        document["_id"] = result.inserted_id
        logger.debug(f"Inserted {collection} document {result.inserted_id}")
        return document

    def update(
        self,
        collection: str,
        document_id: str | ObjectId,
        set_fields: dict[str, Any] | None = None,
        push: dict[str, Any] | None = None,
        pull: dict[str, Any] | None = None,
        session: ClientSession | None = None,
    ) -> dict[str, Any] | None:
        """
        Update one document in place.

        Args:
            set_fields: Fields to overwrite
            push: Field -> value to append to an array field
            pull: Field -> value to remove from an array field

        Returns:
            The updated document, or None if it doesn't exist
        """
        oid = to_object_id(document_id)
        if oid is None:
            return None

        update: dict[str, Any] = {}
        if set_fields:
            update["$set"] = set_fields
        if push:
            update["$push"] = push
        if pull:
            update["$pull"] = pull
        if not update:
            return self.find_by_id(collection, oid, session=session)

        try:
            return self._db[collection].find_one_and_update(
                {"_id": oid},
                update,
                return_document=ReturnDocument.AFTER,
                **self._session_kwargs(session),
            )
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to update {collection} document: {e}",
                code="UPDATE_FAILED",
                details={"collection": collection, "id": str(document_id)},
            ) from e

    def update_many_pull(
        self,
        collection: str,
        document_ids: Iterable[str | ObjectId],
        field: str,
        values: Iterable[str | ObjectId],
        session: ClientSession | None = None,
    ) -> int:
        """
        Remove every id in `values` from the array `field` of each document
        in `document_ids`.

        Returns:
            Number of documents modified
        """
        oids = to_object_ids(document_ids)
        pulled = to_object_ids(values)
        if not oids or not pulled:
            return 0

        try:
            result = self._db[collection].update_many(
                {"_id": {"$in": oids}},
                {"$pull": {field: {"$in": pulled}}},
                **self._session_kwargs(session),
            )
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to update {collection} documents: {e}",
                code="UPDATE_FAILED",
                details={"collection": collection, "field": field},
            ) from e
        return result.modified_count

    def delete(
        self,
        collection: str,
        document_id: str | ObjectId,
        session: ClientSession | None = None,
    ) -> dict[str, Any] | None:
        """
        Delete one document.

        Returns:
            The deleted document, or None if it didn't exist
        """
        oid = to_object_id(document_id)
        if oid is None:
            return None

        try:
            return self._db[collection].find_one_and_delete(
                {"_id": oid}, **self._session_kwargs(session)
            )
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to delete {collection} document: {e}",
                code="DELETE_FAILED",
                details={"collection": collection, "id": str(document_id)},
            ) from e

    def delete_many(
        self,
        collection: str,
        filter: dict[str, Any],
        session: ClientSession | None = None,
    ) -> int:
        """Delete all documents matching `filter`; returns the deleted count."""
        try:
            result = self._db[collection].delete_many(filter, **self._session_kwargs(session))
        except PyMongoError as e:
            raise DocumentStoreError(
                message=f"Failed to delete {collection} documents: {e}",
                code="DELETE_FAILED",
                details={"collection": collection},
            ) from e
        return result.deleted_count
