"""
Document store seam used by the sync handlers.

Handlers receive a `DocumentStore` explicitly instead of reaching for a
process-wide Firestore client, so tests can pass an in-memory double and the
platform adapter decides how clients are created and reused.

Every method is a single-document operation; Firestore applies each one
atomically.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Tuple

from google.api_core.exceptions import NotFound
from google.cloud import firestore


class DocumentStore(ABC):
    @abstractmethod
    def get(self, collection_path: str, doc_id: str) -> Tuple[Optional[dict[str, Any]], bool]:
        """Return `(document, exists)`; document is None when it does not exist."""

    @abstractmethod
    def set(self, collection_path: str, doc_id: str, fields: Mapping[str, Any], *, merge: bool = True) -> None:
        """Create or (field-level) merge a document."""

    @abstractmethod
    def update(self, collection_path: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        """Update fields on an existing document; raises `NotFound` when absent."""

    @abstractmethod
    def delete(self, collection_path: str, doc_id: str) -> None:
        """Delete a document; succeeds when it is already absent."""

    @abstractmethod
    def server_timestamp(self) -> Any:
        """Sentinel the store replaces with its commit time."""


class FirestoreDocumentStore(DocumentStore):
    """
    `DocumentStore` over a `google.cloud.firestore.Client`.

    Collection paths may be nested (`owners/o1/jobs`); Firestore resolves the
    slash-separated path directly.
    """

    def __init__(self, client: firestore.Client) -> None:
        self._db = client

    @property
    def client(self) -> firestore.Client:
        return self._db

    def _ref(self, collection_path: str, doc_id: str) -> firestore.DocumentReference:
        return self._db.collection(collection_path).document(doc_id)

    def get(self, collection_path: str, doc_id: str) -> Tuple[Optional[dict[str, Any]], bool]:
        snap = self._ref(collection_path, doc_id).get()
        if not snap.exists:
            return None, False
        return (snap.to_dict() or {}), True

    def set(self, collection_path: str, doc_id: str, fields: Mapping[str, Any], *, merge: bool = True) -> None:
        self._ref(collection_path, doc_id).set(dict(fields), merge=merge)

    def update(self, collection_path: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        # DocumentReference.update raises google.api_core.exceptions.NotFound for missing docs.
        self._ref(collection_path, doc_id).update(dict(fields))

    def delete(self, collection_path: str, doc_id: str) -> None:
        # Firestore deletes are no-ops for missing documents (no precondition passed).
        self._ref(collection_path, doc_id).delete()

    def server_timestamp(self) -> Any:
        return firestore.SERVER_TIMESTAMP


__all__ = ["DocumentStore", "FirestoreDocumentStore", "NotFound"]
