from __future__ import annotations

import json
import logging
import os
import sys
import threading
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, Mapping

from infra.path import user_data_dir
from infra.version import get_app_version

_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("ts_trace_id", default=None)


def new_trace_id(prefix: str = "run") -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{prefix}-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    value = (_TRACE_ID_CTX.get() or "").strip()
    return value or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """Tag every log record emitted inside the block with one trace id."""
    normalized = (trace_id or "").strip() or new_trace_id()
    token = _TRACE_ID_CTX.set(normalized)
    try:
        yield normalized
    finally:
        _TRACE_ID_CTX.reset(token)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


class OperationalSupport:
    """Append-only JSONL journal of maintenance runs and crashes."""

    def __init__(self, events_path: str | Path | None = None) -> None:
        if events_path is None:
            events_path = user_data_dir() / "logs" / "maintenance-events.jsonl"
        self._events_path = Path(events_path)
        self._events_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    @property
    def events_path(self) -> Path:
        return self._events_path

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        data: Mapping[str, Any] | None = None,
    ) -> str:
        trace_id = current_trace_id() or new_trace_id("evt")
        payload: dict[str, Any] = {
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            "event_type": (event_type or "").strip() or "maintenance.event",
            "level": (level or "INFO").strip().upper(),
            "trace_id": trace_id,
            "message": message or "",
            "app_version": get_app_version(),
            "pid": os.getpid(),
        }
        if data:
            payload["data"] = _jsonable(dict(data))

        line = json.dumps(payload, ensure_ascii=True, sort_keys=True)
        with self._lock:
            with self._events_path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        return trace_id

    def capture_exception(self, exc_value: BaseException, *, context: str) -> str:
        stack = "".join(traceback.format_exception(type(exc_value), exc_value, exc_value.__traceback__))
        return self.emit_event(
            event_type="app.crash",
            level="ERROR",
            message=f"Unhandled exception in {context}: {exc_value}",
            data={"context": context, "exception_type": type(exc_value).__name__, "stacktrace": stack},
        )

    def read_events(self, *, event_type: str | None = None) -> list[dict[str, Any]]:
        if not self._events_path.exists():
            return []
        events: list[dict[str, Any]] = []
        for line in self._events_path.read_text(encoding="utf-8", errors="ignore").splitlines():
            if not line.strip():
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError:
                continue
            if event_type and payload.get("event_type") != event_type:
                continue
            events.append(payload)
        return events


_GLOBAL_SUPPORT: OperationalSupport | None = None
_HOOKS_INSTALLED = False


def get_operational_support() -> OperationalSupport:
    global _GLOBAL_SUPPORT
    if _GLOBAL_SUPPORT is None:
        _GLOBAL_SUPPORT = OperationalSupport()
    return _GLOBAL_SUPPORT


def install_global_exception_hooks(support: OperationalSupport | None = None) -> None:
    """Journal uncaught exceptions from the main thread and worker threads."""
    global _HOOKS_INSTALLED
    if _HOOKS_INSTALLED:
        return
    recorder = support or get_operational_support()
    previous_sys_hook = sys.excepthook
    previous_thread_hook = threading.excepthook

    def _sys_hook(exc_type, exc_value, exc_tb) -> None:
        try:
            recorder.capture_exception(exc_value, context="main-thread")
        except OSError:
            logging.getLogger(__name__).exception("Could not journal crash")
        previous_sys_hook(exc_type, exc_value, exc_tb)

    def _thread_hook(args) -> None:
        name = getattr(args.thread, "name", "worker-thread")
        try:
            recorder.capture_exception(args.exc_value, context=f"thread:{name}")
        except OSError:
            logging.getLogger(__name__).exception("Could not journal crash")
        previous_thread_hook(args)

    sys.excepthook = _sys_hook
    threading.excepthook = _thread_hook
    _HOOKS_INSTALLED = True


__all__ = [
    "OperationalSupport",
    "TraceIdLogFilter",
    "bind_trace_id",
    "current_trace_id",
    "get_operational_support",
    "install_global_exception_hooks",
    "new_trace_id",
]
