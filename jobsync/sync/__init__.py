"""
Bidirectional job synchronization:
- forward: owners/{ownerId}/jobs/{jobId} -> publicJobs/{jobId}
- reverse: status edits on publicJobs/{jobId} -> owners/{ownerId}/jobs/{jobId}
"""

from jobsync.sync.events import OwnerJobWritten, PublicJobUpdated, SyncAction, SyncOutcome
from jobsync.sync.forward import sync_owner_job_to_public
from jobsync.sync.reverse import sync_public_status_to_owner
from jobsync.sync.status import JobStatus, StatusValue, read_status

__all__ = [
    "JobStatus",
    "OwnerJobWritten",
    "PublicJobUpdated",
    "StatusValue",
    "SyncAction",
    "SyncOutcome",
    "read_status",
    "sync_owner_job_to_public",
    "sync_public_status_to_owner",
]
