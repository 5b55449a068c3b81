"""
Audit trail of Gemini API calls (one JSON line per attempt).

Every value passed in replace_vars (the API key) is masked before the record
is written or logged.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from src.utils.logger import REDACTED, get_logger, redact_secrets

logger = get_logger()

MODULE_NAME = "aidomainfinder"
_MAX_LOGGED_RESPONSE_CHARS = 4000


class AuditSink(Protocol):
    def log_call(
        self,
        module: str,
        action: str,
        request: Any,
        response: Any,
        processed: Any,
        replace_vars: list[str] | None = None,
    ) -> None:
        ...


def _redact_value(value: Any, secrets: list[str]) -> Any:
    if isinstance(value, str):
        return redact_secrets(value, secrets)
    if isinstance(value, dict):
        return {k: _redact_value(v, secrets) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_redact_value(v, secrets) for v in value]
    return value


class AuditLog:
    """
    Default audit sink.

    Writes to `path` (JSON lines, appended) when given and always logs a one-line
    summary through the application logger. `records` keeps the entries written
    by this instance for inspection.
    """

    def __init__(self, path: Path | None = None, keep: int = 100) -> None:
        self._path = Path(path) if path else None
        self._keep = keep
        self._lock = threading.Lock()
        self.records: list[dict[str, Any]] = []

    def log_call(
        self,
        module: str,
        action: str,
        request: Any,
        response: Any,
        processed: Any,
        replace_vars: list[str] | None = None,
    ) -> None:
        secrets = [s for s in (replace_vars or []) if s]
        response_text = response if isinstance(response, str) else json.dumps(response, ensure_ascii=False, default=str)
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "module": module,
            "action": action,
            "request": _redact_value(request, secrets),
            "response": redact_secrets(response_text or "", secrets)[:_MAX_LOGGED_RESPONSE_CHARS],
            "processed": _redact_value(processed, secrets),
        }

        with self._lock:
            self.records.append(entry)
            if len(self.records) > self._keep:
                del self.records[: len(self.records) - self._keep]
            if self._path:
                self._append(entry)

        if action.endswith("_Error"):
            logger.warning("%s/%s failed: %s", module, action, entry["processed"])
        else:
            summary = len(processed) if isinstance(processed, (list, tuple)) else entry["processed"]
            logger.info("%s/%s: %s", module, action, summary)

    def _append(self, entry: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")
        except OSError as e:
            logger.warning("Audit log write failed for %s: %s", self._path, e)


__all__ = ["AuditLog", "AuditSink", "MODULE_NAME", "REDACTED"]
