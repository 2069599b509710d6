"""Key-value blob stores backing the repositories.

One key per entity kind; the value is the full serialized list. Writes
always overwrite the whole blob.
"""

from __future__ import annotations

import re
from pathlib import Path

from habitcore.fileio import read_text, write_text_atomic
from habitcore.workspace import store_dir

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class BlobStore:
    """Interface: read/write text blobs by key."""

    def read(self, key: str) -> str | None:
        raise NotImplementedError

    def write(self, key: str, text: str) -> None:
        raise NotImplementedError


class FileBlobStore(BlobStore):
    """Stores each key as ``<directory>/<key>.json`` with atomic writes."""

    def __init__(self, directory: Path | None = None):
        self.directory = Path(directory) if directory is not None else store_dir()

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        return read_text(self.path_for(key))

    def write(self, key: str, text: str) -> None:
        write_text_atomic(self.path_for(key), text)


class MemoryBlobStore(BlobStore):
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.blobs: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.blobs.get(key)

    def write(self, key: str, text: str) -> None:
        self.blobs[key] = text
