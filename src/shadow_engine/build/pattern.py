"""Rebuild-trigger policy.

Decides which directives the host build system should receive so it knows
when to re-run the generator. Relaying them to the host is the caller's
job; this module only computes them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from shadow_engine.paths import artifact_path
from shadow_engine.registry.consts import canonical_key, override_var

LAZY = "lazy"
REAL_TIME = "realtime"
CUSTOM = "custom"

PATTERN_NAMES = (LAZY, REAL_TIME, CUSTOM)

ALWAYS = "rerun-always"
IF_CHANGED = "rerun-if-changed"
IF_ENV_CHANGED = "rerun-if-env-changed"


@dataclass(frozen=True, order=True)
class RerunDirective:
    """One declarative instruction for the host build system."""

    kind: str
    target: str

    def render(self) -> str:
        return f"shadow:{self.kind}={self.target}"


@dataclass(frozen=True)
class BuildPattern:
    """Policy controlling what triggers a regeneration.

    ``lazy`` leaves re-runs to the host's default behaviour, ``realtime``
    always re-runs. ``custom`` re-runs when a listed constant's SHADOW_<KEY>
    override variable changes, or one of the extra paths / env names.
    """

    name: str = LAZY
    keys: frozenset[str] = field(default_factory=frozenset)
    paths: tuple[str, ...] = ()
    envs: tuple[str, ...] = ()

    def __post_init__(self):
        if self.name not in PATTERN_NAMES:
            raise ValueError(f"Unknown build pattern: {self.name}. Valid: {', '.join(PATTERN_NAMES)}")

    @classmethod
    def lazy(cls) -> BuildPattern:
        return cls(LAZY)

    @classmethod
    def real_time(cls) -> BuildPattern:
        return cls(REAL_TIME)

    @classmethod
    def custom(
        cls,
        keys: Iterable[str],
        paths: Iterable[str | Path] = (),
        envs: Iterable[str] = (),
    ) -> BuildPattern:
        return cls(
            CUSTOM,
            frozenset(canonical_key(k) for k in keys),
            tuple(str(p) for p in paths),
            tuple(envs),
        )

    def extend(
        self,
        keys: Iterable[str] = (),
        paths: Iterable[str | Path] = (),
        envs: Iterable[str] = (),
    ) -> BuildPattern:
        """Custom pattern carrying this pattern's triggers plus the given ones."""
        return BuildPattern.custom(
            self.keys | frozenset(canonical_key(k) for k in keys),
            paths=self.paths + tuple(str(p) for p in paths),
            envs=self.envs + tuple(envs),
        )


def select_triggers(
    pattern: BuildPattern,
    keys: Iterable[str],
    out_dir: Path | str,
) -> tuple[RerunDirective, ...]:
    """Return the sorted, de-duplicated directive set for ``pattern``.

    Args:
        pattern: The configured build pattern.
        keys: Identifiers actually present in the (deny-filtered) registry.
        out_dir: Directory the artifact is written to.
    """
    if pattern.name == LAZY:
        return ()
    if pattern.name == REAL_TIME:
        return (RerunDirective(ALWAYS, str(artifact_path(out_dir))),)

    present = set(keys)
    wanted = {canonical_key(k) for k in pattern.keys}
    directives = {RerunDirective(IF_ENV_CHANGED, override_var(k)) for k in wanted if k in present}
    directives.update(RerunDirective(IF_CHANGED, p) for p in pattern.paths)
    directives.update(RerunDirective(IF_ENV_CHANGED, e) for e in pattern.envs)
    return tuple(sorted(directives))
