from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_OWNERS_COLLECTION = "owners"
DEFAULT_JOBS_COLLECTION = "jobs"
DEFAULT_PUBLIC_COLLECTION = "publicJobs"
DEFAULT_OWNER_FIELD = "ownerId"
DEFAULT_REGION = "us-central1"
DEFAULT_SERVICE_NAME = "job-sync"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class JobSyncConfig:
    owners_collection: str = DEFAULT_OWNERS_COLLECTION
    jobs_collection: str = DEFAULT_JOBS_COLLECTION
    public_collection: str = DEFAULT_PUBLIC_COLLECTION
    owner_field: str = DEFAULT_OWNER_FIELD
    region: str = DEFAULT_REGION
    service_name: str = DEFAULT_SERVICE_NAME
    env: str = "prod"
    log_level: str = "INFO"

    @property
    def scoped_document_pattern(self) -> str:
        """Trigger pattern for owner-scoped job documents."""
        return f"{self.owners_collection}/{{ownerId}}/{self.jobs_collection}/{{jobId}}"

    @property
    def public_document_pattern(self) -> str:
        """Trigger pattern for flattened public job documents."""
        return f"{self.public_collection}/{{jobId}}"


def _get_nonempty_env(name: str) -> Optional[str]:
    v = os.getenv(name)
    if v is None:
        return None
    s = str(v).strip()
    return s if s else None


def _collection_name(name: str, default: str) -> str:
    """
    Collection ids are single path segments: no '/', not empty, not reserved.
    """
    v = _get_nonempty_env(name) or default
    if "/" in v:
        raise ConfigError(f"{name} must be a single collection id (no '/'): {v!r}")
    if v in {".", ".."} or (v.startswith("__") and v.endswith("__")):
        raise ConfigError(f"{name} is not a valid Firestore collection id: {v!r}")
    return v


def _field_name(name: str, default: str) -> str:
    v = _get_nonempty_env(name) or default
    if "/" in v or "." in v:
        raise ConfigError(f"{name} must be a top-level field name: {v!r}")
    return v


def _log_level(name: str, default: str) -> str:
    v = (_get_nonempty_env(name) or default).upper()
    if v == "WARN":
        v = "WARNING"
    if v not in _LOG_LEVELS:
        raise ConfigError(f"{name} must be one of {', '.join(_LOG_LEVELS)}: {v!r}")
    return v


def load_config() -> JobSyncConfig:
    """
    Load job sync settings from the environment.

    Every collection and field name can be overridden so the same handlers
    serve deployments that predate the current naming (e.g. shops/{shopId}/jobs
    mirrored into allJobs with a `shopId` back-reference).
    """
    cfg = JobSyncConfig(
        owners_collection=_collection_name("JOB_SYNC_OWNERS_COLLECTION", DEFAULT_OWNERS_COLLECTION),
        jobs_collection=_collection_name("JOB_SYNC_JOBS_COLLECTION", DEFAULT_JOBS_COLLECTION),
        public_collection=_collection_name("JOB_SYNC_PUBLIC_COLLECTION", DEFAULT_PUBLIC_COLLECTION),
        owner_field=_field_name("JOB_SYNC_OWNER_FIELD", DEFAULT_OWNER_FIELD),
        region=_get_nonempty_env("JOB_SYNC_REGION") or DEFAULT_REGION,
        service_name=_get_nonempty_env("SERVICE_NAME") or DEFAULT_SERVICE_NAME,
        env=_get_nonempty_env("ENV") or "prod",
        log_level=_log_level("LOG_LEVEL", logging.getLevelName(logging.INFO)),
    )
    if cfg.public_collection == cfg.owners_collection:
        raise ConfigError("JOB_SYNC_PUBLIC_COLLECTION must differ from JOB_SYNC_OWNERS_COLLECTION")
    return cfg
