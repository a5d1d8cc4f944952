"""
Backfill: replay the forward handler over owner jobs that already exist.

The triggers only see new writes; jobs created before they were deployed (or
while they were failing) are brought in line by running every owner job
through `sync_owner_job_to_public` as if it had just been written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional

from jobsync.common.config import JobSyncConfig
from jobsync.common.logging import log_event
from jobsync.persistence.document_store import DocumentStore
from jobsync.sync.events import OwnerJobWritten, SyncAction
from jobsync.sync.forward import sync_owner_job_to_public
from jobsync.sync.paths import owner_jobs_collection
from jobsync.sync.status import read_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OwnerJob:
    owner_id: str
    job_id: str
    data: dict[str, Any]


@dataclass
class ResyncSummary:
    upserted: int = 0
    deleted: int = 0
    job_ids: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.upserted + self.deleted


def _owner_id_for(snapshot: Any, config: JobSyncConfig) -> Optional[str]:
    # owners/{ownerId}/jobs/{jobId}: jobs collection -> owner doc -> owners collection (top level)
    owner_ref = snapshot.reference.parent.parent
    if owner_ref is None:
        return None
    owners = owner_ref.parent
    if owners.id != config.owners_collection or owners.parent is not None:
        return None
    return owner_ref.id


def iter_owner_jobs(
    client: Any,
    config: JobSyncConfig,
    *,
    owner_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> Iterator[OwnerJob]:
    """
    Stream owner jobs from Firestore.

    Without `owner_id` this is a collection-group scan over every `jobs`
    subcollection; jobs collections nested under other parents are ignored
    and do not count toward `limit`.
    """
    if limit is not None and int(limit) <= 0:
        return
    if owner_id:
        query = client.collection(owner_jobs_collection(config, owner_id))
        if limit is not None:
            query = query.limit(int(limit))
    else:
        # The group scan also matches foreign jobs collections, so the limit
        # is applied to what is yielded rather than to the query.
        query = client.collection_group(config.jobs_collection)

    yielded = 0
    for snap in query.stream():
        oid = owner_id or _owner_id_for(snap, config)
        if not oid:
            continue
        yield OwnerJob(owner_id=oid, job_id=snap.id, data=snap.to_dict() or {})
        yielded += 1
        if limit is not None and yielded >= int(limit):
            return


def resync_public_jobs(
    jobs: Iterable[OwnerJob],
    *,
    store: DocumentStore,
    config: JobSyncConfig,
    dry_run: bool = False,
) -> ResyncSummary:
    summary = ResyncSummary()
    for job in jobs:
        summary.job_ids.append(job.job_id)
        if dry_run:
            if read_status(job.data).is_archived:
                summary.deleted += 1
            else:
                summary.upserted += 1
            continue

        outcome = sync_owner_job_to_public(
            OwnerJobWritten(owner_id=job.owner_id, job_id=job.job_id, before=None, after=job.data),
            store=store,
            config=config,
        )
        if outcome.action is SyncAction.DELETED:
            summary.deleted += 1
        else:
            summary.upserted += 1

    log_event(
        logger,
        "job_sync.resync.completed",
        message=f"Resync processed {summary.total} job(s)",
        dry_run=bool(dry_run),
        upserted=summary.upserted,
        deleted=summary.deleted,
    )
    return summary
