"""Local filesystem key-value storage — one JSON file per key.

Storage layout:
    <data_dir>/<key>.json
"""

import logging
import re
from pathlib import Path

from recordbook.application.interfaces import KeyValueStore
from recordbook.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def _sanitise(name: str, max_len: int = 80) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "unnamed"


class JsonFileKeyValueStore(KeyValueStore):
    """Infrastructure adapter storing each key's value in its own file."""

    def __init__(self, data_dir: str | Path):
        self._data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        return self._data_dir / f"{_sanitise(key)}.json"

    def read(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            raise PersistenceError(key, str(exc)) from exc

    def write(self, key: str, value: bytes) -> None:
        """Overwrite the key's file.

        The value goes to a sibling temp file first and is then renamed over
        the target, so a crash mid-write leaves the previous value intact.
        """
        path = self.path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(value)
            tmp_path.replace(path)
        except OSError as exc:
            if tmp_path.exists():
                tmp_path.unlink()
            raise PersistenceError(key, str(exc)) from exc

        logger.debug("Wrote %s (%d bytes)", path, len(value))
