from __future__ import annotations

import pytest

from jobsync.common.config import JobSyncConfig
from tests.fakes import InMemoryDocumentStore


@pytest.fixture
def config() -> JobSyncConfig:
    return JobSyncConfig()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()
