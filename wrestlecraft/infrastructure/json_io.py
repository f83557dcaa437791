"""JSON file helpers shared by the repositories."""
import json
import logging
import os
import tempfile

log = logging.getLogger("wrestlecraft.store")


def read_json_safe(path: str, default=None):
    """
    Return parsed JSON from `path`, or `default` if the file is absent,
    empty, not UTF-8, or not valid JSON. Other I/O errors propagate.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read().strip()
    except FileNotFoundError:
        return default
    except UnicodeDecodeError as exc:
        log.warning("read_json_safe: %s is not valid UTF-8: %s", path, exc)
        return default
    if not raw:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        log.warning("read_json_safe: failed to parse %s: %s", path, exc)
        return default


def write_json_atomic(path: str, data) -> None:
    """Write to a temp file in the same directory, then replace `path`."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        prefix=os.path.basename(path) + ".", suffix=".tmp", dir=directory,
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise
