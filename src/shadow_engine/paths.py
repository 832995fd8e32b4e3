"""Output, source and config path resolution.

Explicit values win; otherwise environment variables from the snapshot
are consulted. Unresolvable paths raise ``EnvError`` before any write.

Environment variables:
    SHADOW_OUT_DIR — directory receiving shadow.py (falls back to OUT_DIR)
    OUT_DIR — host-provided build output directory
    SHADOW_SRC_DIR — source checkout root
    SHADOW_CONFIG — path to shadow.yaml (default: <src>/shadow.yaml)
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from shadow_engine.errors import EnvError

DEFINE_SHADOW_PY = "shadow.py"
DEFAULT_CONFIG_NAME = "shadow.yaml"


def out_dir(explicit: Path | str | None, env: Mapping[str, str]) -> Path:
    """Return the directory the artifact is written into."""
    if explicit:
        return Path(explicit)
    for var in ("SHADOW_OUT_DIR", "OUT_DIR"):
        value = env.get(var)
        if value:
            return Path(value)
    raise EnvError("No output directory: set out_path, SHADOW_OUT_DIR or OUT_DIR")


def src_dir(explicit: Path | str | None, env: Mapping[str, str]) -> Path:
    """Return the source checkout root."""
    raw = explicit or env.get("SHADOW_SRC_DIR")
    if not raw:
        raise EnvError("No source directory: set src_path or SHADOW_SRC_DIR")
    path = Path(raw)
    if not path.is_dir():
        raise EnvError(f"Source directory not found: {path}")
    return path


def artifact_path(out: Path | str) -> Path:
    """Return the full path of the generated module inside ``out``."""
    return Path(out) / DEFINE_SHADOW_PY


def config_path(src: Path | str, env: Mapping[str, str]) -> Path:
    """Return the config file path (which may not exist)."""
    value = env.get("SHADOW_CONFIG")
    if value:
        return Path(value)
    return Path(src) / DEFAULT_CONFIG_NAME
