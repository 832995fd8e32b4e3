"""Choose between the tag-based and branch-based version definitions.

A checkout sitting on a tag describes itself by that tag; anything else
describes itself by branch, commit and work-tree state. The generated
definitions are f-strings over already emitted constants, so only
constants present in the registry are referenced.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from shadow_engine.emit import templates
from shadow_engine.registry import consts as c
from shadow_engine.registry.model import ConstValue

logger = logging.getLogger(__name__)

TAG_STRATEGY = "tag"
BRANCH_STRATEGY = "branch"

VERSION_NAMES: tuple[str, str] = (c.VERSION, c.CLI_LONG_VERSION)


@dataclass(frozen=True)
class VersionDefs:
    """The selected pair of version definitions, ready to embed verbatim."""

    strategy: str
    version: str
    cli_long_version: str

    @property
    def names(self) -> tuple[str, str]:
        return VERSION_NAMES


def resolve_version(registry: Mapping[str, ConstValue]) -> VersionDefs:
    """Select exactly one version pair from registry contents (no I/O)."""
    tag = registry.get(c.TAG)
    strategy = TAG_STRATEGY if tag is not None and tag.raw != "" else BRANCH_STRATEGY
    logger.debug("version strategy: %s", strategy)

    facts = _fact_lines(registry, strategy)
    head = _ref(registry, c.PKG_VERSION) or ""

    version_lines = [f"pkg_version:{head}"] if head else []
    version_lines += facts

    return VersionDefs(
        strategy=strategy,
        version=templates.VERSION_DEFINITION.format(body="\n".join(version_lines)),
        cli_long_version=templates.CLI_LONG_VERSION_DEFINITION.format(
            body="\n".join(([head] if head else []) + facts),
        ),
    )


def _fact_lines(registry: Mapping[str, ConstValue], strategy: str) -> list[str]:
    lines = []
    if strategy == TAG_STRATEGY:
        lines.append(f"tag:{_ref(registry, c.TAG)}")
    elif c.BRANCH in registry:
        lines.append(f"branch:{_ref(registry, c.BRANCH)}")

    commit = _ref(registry, c.SHORT_COMMIT) or _ref(registry, c.COMMIT_HASH)
    if commit:
        lines.append(f"commit_hash:{commit}")
    if strategy == BRANCH_STRATEGY and c.GIT_CLEAN in registry:
        lines.append(f"git_clean:{_ref(registry, c.GIT_CLEAN)}")
    if c.BUILD_TIME in registry:
        lines.append(f"build_time:{_ref(registry, c.BUILD_TIME)}")

    env = [_ref(registry, k) for k in (c.PYTHON_VERSION, c.PYTHON_IMPLEMENTATION)]
    env = [e for e in env if e]
    if env:
        lines.append("build_env:" + ",".join(env))
    return lines


def _ref(registry: Mapping[str, ConstValue], key: str) -> str | None:
    """f-string placeholder for ``key`` if it will be emitted, else None."""
    if key not in registry:
        return None
    return "{" + key.upper() + "}"
