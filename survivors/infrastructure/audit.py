"""Append-only audit logger for submission outcomes.

Writes newline-delimited JSON entries to the configured audit file.
Thread-safe via a module-level lock (suitable for single-process workers).
"""
import json
import logging
import threading
from datetime import datetime, timezone

from survivors import settings

_LOCK = threading.Lock()

LOG_FILE = settings.AUDIT_LOG_FILE

log = logging.getLogger("survivors.audit")


def log_event(action: str, identity: str | None, payload: dict | None = None) -> None:
    """Record one event. Failures are logged and dropped, never raised."""
    entry = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "action": action,
        "identity": identity,
        "payload": payload or {},
    }
    try:
        with _LOCK:
            LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            with open(LOG_FILE, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    except OSError as exc:
        log.warning("Audit write failed for %s: %s", action, exc)
