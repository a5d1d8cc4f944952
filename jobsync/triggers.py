"""
Adapter between Cloud Functions Firestore events and the sync handlers.

`functions/main.py` registers the triggers; everything here takes plain
`firestore_fn.Event` objects (or anything shaped like one) so it can be driven
from tests without the Functions runtime.
"""

from __future__ import annotations

import threading
from typing import Any, Optional

from jobsync.common.config import JobSyncConfig, load_config
from jobsync.common.logging import bind_event_id
from jobsync.persistence.document_store import DocumentStore, FirestoreDocumentStore
from jobsync.persistence.firebase_client import get_firestore_client
from jobsync.sync.events import OwnerJobWritten, PublicJobUpdated, SyncOutcome
from jobsync.sync.forward import sync_owner_job_to_public
from jobsync.sync.reverse import sync_public_status_to_owner


_store_lock = threading.Lock()
_store: Optional[DocumentStore] = None


def get_default_store() -> DocumentStore:
    """
    Firestore-backed store shared by invocations in this process.

    Reuse only saves connection setup; every handler call is self-contained.
    """
    global _store
    if _store is not None:
        return _store
    with _store_lock:
        if _store is None:
            _store = FirestoreDocumentStore(get_firestore_client())
    return _store


def snapshot_to_dict(snapshot: Any) -> Optional[dict[str, Any]]:
    """
    Convert a Firestore snapshot to a dict; None when the document does not exist.
    """
    if snapshot is None:
        return None
    if getattr(snapshot, "exists", True) is False:
        return None
    data = snapshot.to_dict()
    if data is None:
        return None
    return dict(data)


def owner_job_written_from_event(event: Any) -> OwnerJobWritten:
    params = dict(getattr(event, "params", None) or {})
    change = event.data
    return OwnerJobWritten(
        owner_id=str(params["ownerId"]),
        job_id=str(params["jobId"]),
        before=snapshot_to_dict(getattr(change, "before", None)),
        after=snapshot_to_dict(getattr(change, "after", None)),
    )


def public_job_updated_from_event(event: Any) -> PublicJobUpdated:
    params = dict(getattr(event, "params", None) or {})
    change = event.data
    return PublicJobUpdated(
        job_id=str(params["jobId"]),
        before=snapshot_to_dict(getattr(change, "before", None)),
        after=snapshot_to_dict(getattr(change, "after", None)),
    )


def handle_owner_job_written(
    event: Any,
    *,
    store: Optional[DocumentStore] = None,
    config: Optional[JobSyncConfig] = None,
) -> SyncOutcome:
    with bind_event_id(event_id=getattr(event, "id", None)):
        written = owner_job_written_from_event(event)
        return sync_owner_job_to_public(
            written,
            store=store or get_default_store(),
            config=config or load_config(),
        )


def handle_public_job_updated(
    event: Any,
    *,
    store: Optional[DocumentStore] = None,
    config: Optional[JobSyncConfig] = None,
) -> SyncOutcome:
    with bind_event_id(event_id=getattr(event, "id", None)):
        updated = public_job_updated_from_event(event)
        return sync_public_status_to_owner(
            updated,
            store=store or get_default_store(),
            config=config or load_config(),
        )
