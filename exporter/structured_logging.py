"""JSONL event log of executed check steps."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigLoadError

log = logging.getLogger(__name__)


class StructuredLogger:
    """Appends one JSON line per dispatched step."""

    def __init__(self, run_id: str, path: Path) -> None:
        self.run_id = run_id
        self.path = path
        self._step = 0
        path.parent.mkdir(parents=True, exist_ok=True)
        self._events_file = path.open("a", encoding="utf-8")

    def log_event(
        self,
        *,
        name: str,
        action: Dict[str, Any],
        ok: bool,
        error: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> int:
        self._step += 1
        payload = {
            "ts": time.time(),
            "run_id": self.run_id,
            "step": self._step,
            "name": name,
            "action": action,
            "ok": ok,
            "error": error,
            "details": details or {},
        }
        self._events_file.write(json.dumps(payload, ensure_ascii=False) + "\n")
        self._events_file.flush()
        return self._step

    def close(self) -> None:
        try:
            self._events_file.close()
        except OSError as exc:
            log.debug("Closing %s failed: %s", self.path, exc)

    def __enter__(self) -> "StructuredLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def open_event_log(run_id: str, path: Optional[Path]) -> Optional[StructuredLogger]:
    if path is None:
        return None
    try:
        return StructuredLogger(run_id, path)
    except OSError as exc:
        raise ConfigLoadError(f"Cannot open event log {path}: {exc}", details={"path": str(path)}) from exc
