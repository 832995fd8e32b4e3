"""Project metadata from pyproject.toml plus build-time stamps.

Reads the ``[project]`` table. A missing file falls back to the
SHADOW_PROJECT_NAME / SHADOW_PKG_VERSION environment variables; an
unreadable one does the same after a warning.
"""

from __future__ import annotations

import re
import tomllib
import warnings
from collections.abc import Mapping
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path

from shadow_engine.registry import consts as c
from shadow_engine.registry.model import ConstValue

_VERSION_RE = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?(.*)$")


def read_project(src_path: Path | str, env: Mapping[str, str]) -> dict[str, str]:
    """Return raw project facts (identifier → text)."""
    table = _load_project_table(Path(src_path) / "pyproject.toml")

    name = table.get("name") or env.get("SHADOW_PROJECT_NAME", "")
    version = table.get("version") or env.get("SHADOW_PKG_VERSION", "")
    major, minor, patch, pre = split_version(str(version))

    facts = {
        c.PROJECT_NAME: str(name),
        c.PKG_VERSION: str(version),
        c.PKG_VERSION_MAJOR: major,
        c.PKG_VERSION_MINOR: minor,
        c.PKG_VERSION_PATCH: patch,
        c.PKG_VERSION_PRE: pre,
        c.PKG_DESCRIPTION: str(table.get("description", "")),
        c.BUILD_MODE: env.get("SHADOW_BUILD_MODE", "release"),
    }
    facts.update(build_time_facts(env))
    return facts


def project_consts(src_path: Path | str, env: Mapping[str, str]) -> dict[str, ConstValue]:
    """``read_project`` wrapped into typed registry values."""
    return {
        key: ConstValue.string(raw, c.PROJECT_DESCRIPTIONS[key])
        for key, raw in read_project(src_path, env).items()
    }


def build_time_facts(env: Mapping[str, str]) -> dict[str, str]:
    """Build time in three formats; honours SOURCE_DATE_EPOCH."""
    epoch = env.get("SOURCE_DATE_EPOCH", "").strip()
    if epoch:
        try:
            now = datetime.fromtimestamp(int(epoch), tz=timezone.utc)
        except ValueError:
            warnings.warn(f"Ignoring non-integer SOURCE_DATE_EPOCH: {epoch!r}")
            now = datetime.now(timezone.utc)
    else:
        now = datetime.now(timezone.utc)
    return {
        c.BUILD_TIME: now.strftime("%Y-%m-%d %H:%M:%S %z"),
        c.BUILD_TIME_2822: format_datetime(now),
        c.BUILD_TIME_3339: now.isoformat(),
    }


def split_version(version: str) -> tuple[str, str, str, str]:
    """Split '1.2.3rc1' into ('1', '2', '3', 'rc1'); missing parts are ''."""
    m = _VERSION_RE.match(version.strip())
    if not m:
        return "", "", "", ""
    major, minor, patch, rest = m.groups()
    return major or "", minor or "", patch or "", rest.lstrip("-.+") if rest else ""


def _load_project_table(path: Path) -> dict:
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        warnings.warn(f"Failed to read {path}: {e}")
        return {}
    project = data.get("project", {})
    return project if isinstance(project, dict) else {}
