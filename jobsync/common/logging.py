"""
Structured JSON logging for the sync triggers (stdlib-only).

One JSON object per stdout line, which Cloud Logging parses into jsonPayload.
Every line carries service, env, version, the change-event id of the trigger
invocation (`event_id`) and a stable `event_type`.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterator, Optional


_EVENT_ID: ContextVar[Optional[str]] = ContextVar("event_id", default=None)

# Attributes every LogRecord has, plus the keys the formatter sets itself.
# Anything else on a record came from `extra=` and is copied into the payload.
_RECORD_ATTRS: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}
_PAYLOAD_KEYS: frozenset[str] = frozenset(
    {"timestamp", "severity", "service", "env", "version", "event_id", "event_type", "logger"}
)


def _one_line(v: Any, *, max_len: int) -> str:
    s = "" if v is None else str(v)
    s = " ".join(s.splitlines()).strip()
    return s if len(s) <= max_len else s[: max_len - 1] + "…"


def _first_env(*names: str, default: str) -> str:
    for name in names:
        v = (os.getenv(name) or "").strip()
        if v:
            return _one_line(v, max_len=128)
    return default


def default_service_name() -> str:
    return _first_env("SERVICE_NAME", "K_SERVICE", "FUNCTION_TARGET", default="job-sync")


def default_env_name() -> str:
    return _first_env("ENV", "ENVIRONMENT", default="unknown")


def default_version() -> str:
    return _first_env("APP_VERSION", "K_REVISION", default="unknown")


def get_event_id() -> Optional[str]:
    return _EVENT_ID.get()


@contextmanager
def bind_event_id(*, event_id: str | None = None) -> Iterator[str]:
    """
    Bind the change-event id for the lifetime of one trigger invocation.

    Redelivered events keep the same id, so duplicates are easy to spot in logs.
    """
    eid = _one_line(event_id, max_len=128) or uuid.uuid4().hex
    token = _EVENT_ID.set(eid)
    try:
        yield eid
    finally:
        _EVENT_ID.reset(token)


class JsonLogFormatter(logging.Formatter):
    def __init__(self, *, service: str | None, env: str | None, version: str | None) -> None:
        super().__init__()
        self._base = {
            "service": service or default_service_name(),
            "env": env or default_env_name(),
            "version": version or default_version(),
        }

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (format required by logging)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            # Cloud Logging knows WARNING/ERROR/CRITICAL/INFO/DEBUG directly.
            "severity": record.levelname,
            **self._base,
            "event_id": get_event_id(),
            "event_type": getattr(record, "event_type", None) or "log",
            "message": _one_line(record.getMessage(), max_len=4000),
            "logger": record.name,
        }

        if record.exc_info:
            payload["exception"] = "".join(traceback.format_exception(*record.exc_info))[-8000:]
        elif record.stack_info:
            payload["stack"] = record.stack_info[-8000:]

        for k, v in vars(record).items():
            if k in _RECORD_ATTRS or k in _PAYLOAD_KEYS or k.startswith("_"):
                continue
            payload[k] = v

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def init_structured_logging(
    *,
    service: str | None = None,
    env: str | None = None,
    version: str | None = None,
    level: str | int | None = None,
) -> None:
    """
    Configure stdlib logging to emit JSON lines to stdout.

    Safe to call multiple times (last call wins).
    """
    lvl = level or os.getenv("LOG_LEVEL", "INFO").upper()
    root = logging.getLogger()
    root.setLevel(lvl)

    # Replace handlers to ensure JSON output.
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonLogFormatter(service=service, env=env, version=version))
    root.handlers = [handler]

    logging.captureWarnings(True)


def log_event(logger: logging.Logger, event_type: str, *, message: str | None = None, **fields: Any) -> None:
    """
    Log an INFO line with a stable `event_type` and structured fields.
    """
    logger.info(message or event_type, extra={"event_type": event_type, **fields})
