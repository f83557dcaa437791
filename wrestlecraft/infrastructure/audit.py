"""Append-only audit log for character mutations.

Writes newline-delimited JSON entries to `<AUDIT_LOG_DIR>/audit.log`.
Thread-safe via a module-level lock; entries are written from worker
threads when called through asyncio.to_thread.
"""
import json
import threading
from datetime import datetime, timezone
from pathlib import Path

from wrestlecraft import config

_LOCK = threading.Lock()

LOG_DIR = Path(config.AUDIT_LOG_DIR)
LOG_FILE = LOG_DIR / "audit.log"
ENABLED = config.AUDIT_LOG_ENABLED


def _ensure_dir():
    LOG_DIR.mkdir(parents=True, exist_ok=True)


def log_event(action: str, character_id: str | None, payload: dict | None = None) -> None:
    if not ENABLED:
        return
    _ensure_dir()
    entry = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "action": action,
        "character_id": character_id,
        "payload": payload or {},
    }
    with _LOCK:
        with open(LOG_FILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")
