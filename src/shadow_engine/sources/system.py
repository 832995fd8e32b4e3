"""Build-host facts: platform, interpreter and installed distributions.

The distribution listing walks every installed package, so it is skipped
entirely when both of its identifiers are denied.
"""

from __future__ import annotations

import json
import platform
import sysconfig
from collections.abc import Iterable, Mapping
from importlib import metadata

from shadow_engine.registry import consts as c
from shadow_engine.registry.model import ConstKind, ConstValue


def read_system(
    env: Mapping[str, str],
    deny: Iterable[str] = (),
) -> dict[str, ConstValue]:
    """Return system-environment constants, omitting denied expensive ones."""
    denied = set(deny)
    raw = {
        c.BUILD_OS: f"{platform.system().lower()}-{platform.machine().lower()}",
        c.BUILD_TARGET: sysconfig.get_platform(),
        c.BUILD_TARGET_ARCH: platform.machine(),
        c.PYTHON_VERSION: platform.python_version(),
        c.PYTHON_IMPLEMENTATION: platform.python_implementation(),
        c.PIP_VERSION: _dist_version("pip"),
    }

    wants_tree = c.DEPENDENCY_TREE not in denied
    wants_meta = c.PACKAGE_METADATA not in denied
    if wants_tree or wants_meta:
        dists = installed_distributions()
        if wants_tree:
            raw[c.DEPENDENCY_TREE] = "\n".join(f"{n}=={v}" for n, v in dists)
        if wants_meta:
            raw[c.PACKAGE_METADATA] = json.dumps(
                [{"name": n, "version": v} for n, v in dists],
                separators=(",", ":"),
            )

    return {
        key: ConstValue(c.SYSTEM_KINDS.get(key, ConstKind.STR), value, c.SYSTEM_DESCRIPTIONS[key])
        for key, value in raw.items()
    }


def installed_distributions() -> list[tuple[str, str]]:
    """Sorted, de-duplicated (name, version) pairs of installed distributions."""
    seen: dict[str, str] = {}
    for dist in metadata.distributions():
        name = dist.metadata["Name"]
        if not name:
            continue
        seen.setdefault(name.lower(), dist.version)
    return sorted(seen.items())


def _dist_version(name: str) -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return ""


def read_overrides(
    known: Mapping[str, ConstValue],
    env: Mapping[str, str],
) -> dict[str, ConstValue]:
    """Values forced through SHADOW_<KEY> variables for already known constants.

    The kind and description of the overridden constant are kept.
    """
    out = {}
    for key, value in known.items():
        var = c.override_var(key)
        if var in env:
            out[key] = value.with_raw(env[var])
    return out
