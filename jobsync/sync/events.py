from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class OwnerJobWritten:
    """
    One write on `owners/{ownerId}/jobs/{jobId}`.

    `after is None` means the job was deleted. An existing document with no
    fields is `{}`, not None.
    """

    owner_id: str
    job_id: str
    before: Optional[dict[str, Any]]
    after: Optional[dict[str, Any]]


@dataclass(frozen=True)
class PublicJobUpdated:
    """One update on `publicJobs/{jobId}`; both states are expected but not trusted."""

    job_id: str
    before: Optional[dict[str, Any]]
    after: Optional[dict[str, Any]]


class SyncDirection(str, Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


class SyncAction(str, Enum):
    UPSERTED = "upserted"
    DELETED = "deleted"
    UPDATED = "updated"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SyncOutcome:
    direction: SyncDirection
    action: SyncAction
    job_id: str
    reason: str
    owner_id: Optional[str] = None
    status: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.action is not SyncAction.SKIPPED

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["direction"] = self.direction.value
        d["action"] = self.action.value
        d["applied"] = self.applied
        return d
