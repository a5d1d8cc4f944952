from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest
from google.api_core.exceptions import NotFound
from google.cloud import firestore

from jobsync.persistence.document_store import FirestoreDocumentStore


class _FakeSnap:
    def __init__(self, *, exists: bool, data: dict[str, Any] | None):
        self.exists = bool(exists)
        self._data = dict(data or {})

    def to_dict(self) -> dict[str, Any] | None:
        return dict(self._data) if self.exists else None


@dataclass
class _FakeDocRef:
    store: dict[str, dict[str, Any]]
    path: str

    def set(self, data: dict[str, Any], merge: bool = False) -> None:  # noqa: FBT001,FBT002
        if merge and self.path in self.store:
            merged = dict(self.store[self.path])
            merged.update(dict(data))
            self.store[self.path] = merged
        else:
            self.store[self.path] = dict(data)

    def update(self, data: dict[str, Any]) -> None:
        if self.path not in self.store:
            raise NotFound(f"No document to update: {self.path}")
        self.store[self.path].update(dict(data))

    def delete(self) -> None:
        self.store.pop(self.path, None)

    def get(self) -> _FakeSnap:
        if self.path in self.store:
            return _FakeSnap(exists=True, data=self.store[self.path])
        return _FakeSnap(exists=False, data=None)


@dataclass
class _FakeCollection:
    store: dict[str, dict[str, Any]]
    path: str

    def document(self, doc_id: str) -> _FakeDocRef:
        return _FakeDocRef(store=self.store, path=f"{self.path}/{doc_id}")


class _FakeFirestore:
    def __init__(self):
        self._store: dict[str, dict[str, Any]] = {}

    def collection(self, name: str) -> _FakeCollection:
        return _FakeCollection(store=self._store, path=name)


def test_get_missing_document() -> None:
    s = FirestoreDocumentStore(_FakeFirestore())
    assert s.get("publicJobs", "j1") == (None, False)


def test_set_merge_and_get_nested_collection_path() -> None:
    fake = _FakeFirestore()
    s = FirestoreDocumentStore(fake)

    s.set("owners/o1/jobs", "j1", {"status": "pending", "title": "Cook"}, merge=True)
    s.set("owners/o1/jobs", "j1", {"status": "active"}, merge=True)

    doc, exists = s.get("owners/o1/jobs", "j1")
    assert exists
    assert doc == {"status": "active", "title": "Cook"}
    assert list(fake._store.keys()) == ["owners/o1/jobs/j1"]


def test_set_without_merge_replaces() -> None:
    s = FirestoreDocumentStore(_FakeFirestore())
    s.set("publicJobs", "j1", {"a": 1, "b": 2})
    s.set("publicJobs", "j1", {"a": 3}, merge=False)
    assert s.get("publicJobs", "j1") == ({"a": 3}, True)


def test_update_missing_raises_not_found() -> None:
    s = FirestoreDocumentStore(_FakeFirestore())
    with pytest.raises(NotFound):
        s.update("owners/o1/jobs", "j1", {"status": "closed"})


def test_delete_is_idempotent() -> None:
    s = FirestoreDocumentStore(_FakeFirestore())
    s.set("publicJobs", "j1", {"status": "active"})
    s.delete("publicJobs", "j1")
    s.delete("publicJobs", "j1")
    assert s.get("publicJobs", "j1") == (None, False)


def test_server_timestamp_is_firestore_sentinel() -> None:
    s = FirestoreDocumentStore(_FakeFirestore())
    assert s.server_timestamp() is firestore.SERVER_TIMESTAMP
