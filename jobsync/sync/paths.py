from __future__ import annotations

from jobsync.common.config import JobSyncConfig


def owner_jobs_collection(config: JobSyncConfig, owner_id: str) -> str:
    """Collection path holding one owner's jobs, e.g. `owners/o1/jobs`."""
    return f"{config.owners_collection}/{owner_id}/{config.jobs_collection}"


def public_jobs_collection(config: JobSyncConfig) -> str:
    return config.public_collection


def owner_job_path(config: JobSyncConfig, owner_id: str, job_id: str) -> str:
    return f"{owner_jobs_collection(config, owner_id)}/{job_id}"


def public_job_path(config: JobSyncConfig, job_id: str) -> str:
    return f"{public_jobs_collection(config)}/{job_id}"
