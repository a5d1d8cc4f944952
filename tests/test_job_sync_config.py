from __future__ import annotations

import pytest

from jobsync.common.config import ConfigError, JobSyncConfig, load_config

_ENV_VARS = (
    "JOB_SYNC_OWNERS_COLLECTION",
    "JOB_SYNC_JOBS_COLLECTION",
    "JOB_SYNC_PUBLIC_COLLECTION",
    "JOB_SYNC_OWNER_FIELD",
    "JOB_SYNC_REGION",
    "SERVICE_NAME",
    "ENV",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for k in _ENV_VARS:
        monkeypatch.delenv(k, raising=False)


def test_defaults() -> None:
    cfg = load_config()
    assert cfg == JobSyncConfig()
    assert cfg.scoped_document_pattern == "owners/{ownerId}/jobs/{jobId}"
    assert cfg.public_document_pattern == "publicJobs/{jobId}"
    assert cfg.owner_field == "ownerId"
    assert cfg.log_level == "INFO"


def test_legacy_shop_layout(monkeypatch) -> None:
    monkeypatch.setenv("JOB_SYNC_OWNERS_COLLECTION", "shops")
    monkeypatch.setenv("JOB_SYNC_PUBLIC_COLLECTION", "allJobs")
    monkeypatch.setenv("JOB_SYNC_OWNER_FIELD", "shopId")

    cfg = load_config()

    assert cfg.scoped_document_pattern == "shops/{ownerId}/jobs/{jobId}"
    assert cfg.public_document_pattern == "allJobs/{jobId}"
    assert cfg.owner_field == "shopId"


def test_blank_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("JOB_SYNC_PUBLIC_COLLECTION", "   ")
    monkeypatch.setenv("LOG_LEVEL", "")
    cfg = load_config()
    assert cfg.public_collection == "publicJobs"
    assert cfg.log_level == "INFO"


def test_log_level_is_normalized(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warn")
    assert load_config().log_level == "WARNING"


@pytest.mark.parametrize(
    "name,value",
    [
        ("JOB_SYNC_PUBLIC_COLLECTION", "public/jobs"),
        ("JOB_SYNC_OWNERS_COLLECTION", "__owners__"),
        ("JOB_SYNC_JOBS_COLLECTION", ".."),
        ("JOB_SYNC_OWNER_FIELD", "owner.id"),
        ("LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_raise(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        load_config()


def test_public_collection_must_differ_from_owners(monkeypatch) -> None:
    monkeypatch.setenv("JOB_SYNC_PUBLIC_COLLECTION", "owners")
    with pytest.raises(ConfigError):
        load_config()
