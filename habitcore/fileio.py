"""Atomic file I/O utilities for habitcore."""

from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml


def read_text(path: Path) -> str | None:
    """Read a text file, returning None if missing."""
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")


def read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML file, returning empty dict if missing or empty."""
    text = read_text(path)
    if not text or not text.strip():
        return {}
    result = yaml.safe_load(text)
    return result if isinstance(result, dict) else {}


def _atomic_write(path: Path, content: str, suffix: str = ".tmp") -> None:
    """Atomic write with file locking: temp file + flock + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp_", suffix=suffix)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        os.rename(temp_path, path)
    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


def write_text_atomic(path: Path, content: str) -> None:
    """Atomic text file write."""
    _atomic_write(path, content, suffix=path.suffix or ".tmp")


def write_yaml_atomic(path: Path, data: dict[str, Any]) -> None:
    """Atomic YAML write."""
    content = yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    _atomic_write(path, content, suffix=".yaml")
