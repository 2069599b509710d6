"""Data root, settings, and timezone helpers for habitcore."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from habitcore.fileio import read_yaml, write_yaml_atomic

logger = logging.getLogger(__name__)


def workspace_root() -> Path:
    """Get the data root directory (holds settings.yaml and store/)."""
    return Path(
        os.environ.get("HABITCORE_ROOT", str(Path.home() / ".habitcore"))
    ).expanduser().resolve()


def load_settings(root: Path | None = None) -> dict[str, Any]:
    """Load settings.yaml, returning an empty dict if missing or unreadable."""
    if root is None:
        root = workspace_root()
    try:
        return read_yaml(settings_path(root))
    except (OSError, yaml.YAMLError):
        logger.warning("Could not read %s, using defaults", settings_path(root), exc_info=True)
        return {}


def save_settings(settings: dict[str, Any], root: Path | None = None) -> None:
    """Write settings.yaml atomically."""
    write_yaml_atomic(settings_path(root), settings)


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get the configured timezone from settings.yaml, defaulting to UTC."""
    settings = load_settings(root)
    name = settings.get("timezone")
    if name:
        try:
            return ZoneInfo(str(name))
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r in settings, falling back to UTC", name)
    return ZoneInfo("UTC")


# ── Path helpers ──────────────────────────────────────────────

def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "settings.yaml"


def store_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "store"


def log_path(root: Path | None = None) -> Path:
    """Log file from settings.yaml (relative paths resolve against the root)."""
    if root is None:
        root = workspace_root()
    configured = load_settings(root).get("log_file")
    if configured:
        path = Path(str(configured)).expanduser()
        return path if path.is_absolute() else root / path
    return root / "logs" / "habitcore.log"
