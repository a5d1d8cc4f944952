from __future__ import annotations

import os
import uuid

import pytest

from jobsync.common.config import JobSyncConfig
from jobsync.sync.events import OwnerJobWritten, PublicJobUpdated, SyncAction
from jobsync.sync.forward import sync_owner_job_to_public
from jobsync.sync.reverse import sync_public_status_to_owner


def test_firestore_emulator_sync_roundtrip() -> None:
    """
    Integration gate: run both handlers against the local Firestore emulator.

    This test is intended to run under:
      firebase emulators:exec --only firestore "pytest tests/test_firestore_emulator_integration.py"
    """
    if not os.getenv("FIRESTORE_EMULATOR_HOST"):
        pytest.skip("FIRESTORE_EMULATOR_HOST is not set; run under Firestore emulator")

    from google.cloud import firestore

    from jobsync.persistence.document_store import FirestoreDocumentStore

    project = os.getenv("GOOGLE_CLOUD_PROJECT") or os.getenv("GCLOUD_PROJECT") or "demo-job-sync-ci"
    suffix = uuid.uuid4().hex[:8]
    cfg = JobSyncConfig(owners_collection=f"ci_owners_{suffix}", public_collection=f"ci_public_{suffix}")
    store = FirestoreDocumentStore(firestore.Client(project=project))

    owner_jobs = f"{cfg.owners_collection}/o1/{cfg.jobs_collection}"
    store.set(owner_jobs, "j1", {"status": "active", "title": "Barista"})
    job, _ = store.get(owner_jobs, "j1")

    out = sync_owner_job_to_public(OwnerJobWritten(owner_id="o1", job_id="j1", before=None, after=job), store=store, config=cfg)
    assert out.action is SyncAction.UPSERTED
    public, exists = store.get(cfg.public_collection, "j1")
    assert exists
    assert public["ownerId"] == "o1"
    assert public["syncedAt"] is not None

    edited = {**public, "status": "closed"}
    back = sync_public_status_to_owner(PublicJobUpdated(job_id="j1", before=public, after=edited), store=store, config=cfg)
    assert back.action is SyncAction.UPDATED
    job_after, _ = store.get(owner_jobs, "j1")
    assert job_after["status"] == "closed"

    out2 = sync_owner_job_to_public(
        OwnerJobWritten(owner_id="o1", job_id="j1", before=job_after, after={**job_after, "status": "archived"}),
        store=store,
        config=cfg,
    )
    assert out2.action is SyncAction.DELETED
    assert store.get(cfg.public_collection, "j1") == (None, False)

    store.delete(owner_jobs, "j1")
