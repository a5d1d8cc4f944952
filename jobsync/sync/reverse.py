"""
Reverse sync: status edits on publicJobs/{jobId} -> owners/{ownerId}/jobs/{jobId}.

Lets operators approve/activate jobs by editing the public copy while the
owner's job stays the single source of truth.

Loop prevention: the forward handler copies status verbatim, so its writes
never change `status` on the public document. The old == new gate below
therefore absorbs every forward-originated update, and the already-converged
check keeps a reverse write from re-triggering forward needlessly.
"""

from __future__ import annotations

import logging
from typing import Optional

from jobsync.common.config import JobSyncConfig
from jobsync.common.logging import log_event
from jobsync.persistence.document_store import DocumentStore
from jobsync.sync.events import PublicJobUpdated, SyncAction, SyncDirection, SyncOutcome
from jobsync.sync.paths import owner_job_path, owner_jobs_collection
from jobsync.sync.status import STATUS_FIELD, read_status

logger = logging.getLogger(__name__)

UPDATED_AT_FIELD = "updatedAt"


def _skip(
    *,
    job_id: str,
    reason: str,
    message: str,
    owner_id: Optional[str] = None,
    status: Optional[str] = None,
) -> SyncOutcome:
    log_event(
        logger,
        "job_sync.reverse.skipped",
        message=f"[reverse-sync] {message}",
        job_id=job_id,
        owner_id=owner_id,
        reason=reason,
    )
    return SyncOutcome(
        direction=SyncDirection.REVERSE,
        action=SyncAction.SKIPPED,
        job_id=job_id,
        owner_id=owner_id,
        reason=reason,
        status=status,
    )


def sync_public_status_to_owner(
    event: PublicJobUpdated,
    *,
    store: DocumentStore,
    config: Optional[JobSyncConfig] = None,
) -> SyncOutcome:
    """
    Fold a direct status edit on a public job back into the owner's job.

    Skips (not errors): malformed event, unchanged status, missing owner
    back-reference, missing owner job, owner job already at the new status.
    Storage errors propagate so the platform redelivers the event.
    """
    cfg = config or JobSyncConfig()
    job_id = event.job_id

    if event.before is None or event.after is None:
        return _skip(job_id=job_id, reason="malformed_event", message=f"Job {job_id} update event is missing a snapshot.")

    # Exact comparison: a case-only edit is still a status change.
    old = read_status(event.before)
    new = read_status(event.after)
    new_status = new.raw
    if old.same_as(new):
        return _skip(
            job_id=job_id,
            reason="status_unchanged",
            message=f"Job {job_id} status unchanged ({new_status}), nothing to do.",
            status=new_status,
        )

    # The owner id is used exactly as stored; document ids may carry spaces.
    owner_id = event.after.get(cfg.owner_field)
    if owner_id is None or owner_id == "":
        return _skip(
            job_id=job_id,
            reason="missing_owner",
            message=f"Skipping job {job_id} because {cfg.owner_field} is missing on {cfg.public_collection} doc.",
            status=new_status,
        )
    owner_id = str(owner_id)

    path = owner_job_path(cfg, owner_id, job_id)
    try:
        current_doc, exists = store.get(owner_jobs_collection(cfg, owner_id), job_id)
        if not exists:
            return _skip(
                job_id=job_id,
                owner_id=owner_id,
                reason="owner_job_missing",
                message=f"Job {job_id} not found under owner {owner_id}, nothing to update.",
                status=new_status,
            )

        current = read_status(current_doc)
        if current.same_as(new):
            return _skip(
                job_id=job_id,
                owner_id=owner_id,
                reason="already_converged",
                message=f"Job {job_id} under owner {owner_id} already has status {new_status}.",
                status=new_status,
            )

        store.update(
            owner_jobs_collection(cfg, owner_id),
            job_id,
            {
                STATUS_FIELD: new.value,
                UPDATED_AT_FIELD: store.server_timestamp(),
            },
        )
    except Exception:
        logger.exception(f"Error reverse-syncing job {job_id} from {cfg.public_collection}")
        raise

    log_event(
        logger,
        "job_sync.reverse.updated",
        message=f"[reverse-sync] Job {job_id} status updated in {path} to {new_status}.",
        job_id=job_id,
        owner_id=owner_id,
        previous_status=current.raw,
        status=new_status,
    )
    return SyncOutcome(
        direction=SyncDirection.REVERSE,
        action=SyncAction.UPDATED,
        job_id=job_id,
        owner_id=owner_id,
        reason="status_changed",
        status=new_status,
    )
