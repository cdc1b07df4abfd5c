# src/tasktrack/storage/blob_store.py

from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileBlobStore:
    """
    Durable key -> string store: one UTF-8 file per key under a directory.

    Writes go to a temp file first and are moved into place with os.replace,
    so a crash mid-write never leaves a truncated blob behind.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        logger.debug("FileBlobStore ready root=%s", self._root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        if not key or not _KEY_RE.match(key) or key.startswith("."):
            raise ValueError(f"invalid blob key: {key!r}")
        return self._root / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text("utf-8")

    def write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(Exception):
            # Best-effort: the snapshot holds user emails, keep it private on disk.
            os.chmod(path, 0o600)
        logger.debug("Blob written key=%s bytes=%d", key, len(value))
