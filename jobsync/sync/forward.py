"""
Forward sync: owners/{ownerId}/jobs/{jobId} -> publicJobs/{jobId}.

Every write on an owner's job is mirrored into the public listing unless the
job was deleted or archived, in which case the public copy is removed.

Each branch is a single idempotent upsert or delete, so redelivered events
converge to the same public document.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from jobsync.common.config import JobSyncConfig
from jobsync.common.logging import log_event
from jobsync.persistence.document_store import DocumentStore
from jobsync.sync.events import OwnerJobWritten, SyncAction, SyncDirection, SyncOutcome
from jobsync.sync.paths import public_jobs_collection
from jobsync.sync.status import read_status

logger = logging.getLogger(__name__)

SYNCED_AT_FIELD = "syncedAt"


def build_public_job(
    *,
    job: dict[str, Any],
    owner_id: str,
    config: JobSyncConfig,
    synced_at: Any,
) -> dict[str, Any]:
    """
    Public copy of an owner's job: all fields verbatim, plus the owner
    back-reference and the sync timestamp. The owner field always reflects the
    document path, never a same-named payload field.
    """
    return {
        **job,
        config.owner_field: owner_id,
        SYNCED_AT_FIELD: synced_at,
    }


def _delete_public(
    *,
    store: DocumentStore,
    config: JobSyncConfig,
    event: OwnerJobWritten,
    reason: str,
    status: Optional[str],
) -> SyncOutcome:
    store.delete(public_jobs_collection(config), event.job_id)
    log_event(
        logger,
        "job_sync.forward.deleted",
        message=f"[{status or 'deleted'}] Job {event.job_id} removed from {config.public_collection}",
        job_id=event.job_id,
        owner_id=event.owner_id,
        reason=reason,
    )
    return SyncOutcome(
        direction=SyncDirection.FORWARD,
        action=SyncAction.DELETED,
        job_id=event.job_id,
        owner_id=event.owner_id,
        reason=reason,
        status=status,
    )


def sync_owner_job_to_public(
    event: OwnerJobWritten,
    *,
    store: DocumentStore,
    config: Optional[JobSyncConfig] = None,
) -> SyncOutcome:
    """
    Mirror one owner job write into the public collection.

    - deleted job            -> delete public copy
    - status == archived     -> delete public copy (case-insensitive match)
    - anything else          -> merge-upsert public copy, status copied verbatim

    Storage errors propagate so the platform redelivers the event.
    """
    cfg = config or JobSyncConfig()

    try:
        if event.after is None:
            return _delete_public(store=store, config=cfg, event=event, reason="owner_job_deleted", status=None)

        status = read_status(event.after)
        if status.is_archived:
            return _delete_public(store=store, config=cfg, event=event, reason="archived", status=status.raw)

        doc = build_public_job(
            job=event.after,
            owner_id=event.owner_id,
            config=cfg,
            synced_at=store.server_timestamp(),
        )
        store.set(public_jobs_collection(cfg), event.job_id, doc, merge=True)
    except Exception:
        logger.exception(f"Error syncing job {event.job_id} from owner {event.owner_id}")
        raise

    log_event(
        logger,
        "job_sync.forward.upserted",
        message=f"[{status.raw}] Job {event.job_id} synced to {cfg.public_collection} from owner {event.owner_id}",
        job_id=event.job_id,
        owner_id=event.owner_id,
        status=status.raw,
    )
    return SyncOutcome(
        direction=SyncDirection.FORWARD,
        action=SyncAction.UPSERTED,
        job_id=event.job_id,
        owner_id=event.owner_id,
        reason=status.kind.value,
        status=status.raw,
    )
