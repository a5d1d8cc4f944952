"""
Job status values.

Status is stored as a free-form value. Known values are classified into
`JobStatus`; anything else is `JobStatus.OTHER` and keeps its stored value so
it passes through both sync directions unmodified.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


STATUS_FIELD = "status"


class JobStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    CLOSED = "closed"
    ARCHIVED = "archived"
    OTHER = "other"


DEFAULT_STATUS = JobStatus.PENDING


@dataclass(frozen=True)
class StatusValue:
    """
    A status as stored (`value`), its text form (`raw`) and its routing
    classification (`kind`).

    `value` is what gets compared and written back. `raw` is only for routing
    and log lines; it equals `value` whenever the stored status is a string.
    """

    value: Any
    raw: str
    kind: JobStatus

    @property
    def is_archived(self) -> bool:
        return self.kind is JobStatus.ARCHIVED

    def same_as(self, other: "StatusValue") -> bool:
        # 1 == True in Python; stored bools and numbers are distinct statuses.
        a, b = self.value, other.value
        if isinstance(a, bool) or isinstance(b, bool):
            return type(a) is type(b) and a == b
        return a == b


def classify_status(value: Any) -> StatusValue:
    # Absent and empty statuses both mean "pending".
    if value is None or value == "":
        value = DEFAULT_STATUS.value
    raw = value if isinstance(value, str) else str(value)

    try:
        kind = JobStatus(raw.lower())
    except ValueError:
        kind = JobStatus.OTHER
    return StatusValue(value=value, raw=raw, kind=kind)


def read_status(doc: Optional[Mapping[str, Any]]) -> StatusValue:
    if not doc:
        return classify_status(None)
    return classify_status(doc.get(STATUS_FIELD))
