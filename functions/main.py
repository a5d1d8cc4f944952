"""
Job sync Cloud Functions.

Keeps owners/{ownerId}/jobs/{jobId} and the public listing publicJobs/{jobId}
consistent:
- sync_owner_job_to_public: any write on an owner's job mirrors it into the
  public listing (or removes it when deleted/archived)
- sync_public_job_status_to_owner: a status edit made directly on the public
  listing is propagated back to the owner's job

Collection names come from JOB_SYNC_* env vars (see jobsync.common.config).
"""

from __future__ import annotations

import logging

from firebase_functions import firestore_fn

from jobsync.common.config import load_config
from jobsync.common.logging import init_structured_logging
from jobsync.triggers import handle_owner_job_written, handle_public_job_updated

CONFIG = load_config()
init_structured_logging(service=CONFIG.service_name, env=CONFIG.env, level=CONFIG.log_level)
logger = logging.getLogger(__name__)


@firestore_fn.on_document_written(
    document=CONFIG.scoped_document_pattern,
    region=CONFIG.region,
)
def sync_owner_job_to_public(
    event: firestore_fn.Event[firestore_fn.Change[firestore_fn.DocumentSnapshot | None]],
) -> None:
    """
    Firestore trigger: mirror owner job writes into the public listing.

    Triggered on: create, update and delete of owners/{ownerId}/jobs/{jobId}.
    Raises on storage errors so the event is redelivered.
    """
    outcome = handle_owner_job_written(event, config=CONFIG)
    logger.debug("sync_owner_job_to_public: %s", outcome.to_dict())


@firestore_fn.on_document_updated(
    document=CONFIG.public_document_pattern,
    region=CONFIG.region,
)
def sync_public_job_status_to_owner(
    event: firestore_fn.Event[firestore_fn.Change[firestore_fn.DocumentSnapshot]],
) -> None:
    """
    Firestore trigger: fold direct status edits on publicJobs/{jobId} back into
    the owner's job. Updates that leave status unchanged are ignored, which
    includes every write made by sync_owner_job_to_public.
    """
    outcome = handle_public_job_updated(event, config=CONFIG)
    logger.debug("sync_public_job_status_to_owner: %s", outcome.to_dict())
