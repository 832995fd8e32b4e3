"""One generation run: collect → merge → filter → resolve → select → emit → hook.

The run is sequential and starts from a fresh registry every time. Any
failure aborts it; a partially written artifact is left in place and must
be treated as invalid until a full run succeeds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from shadow_engine.build.pattern import BuildPattern, RerunDirective, select_triggers
from shadow_engine.ci.detect import CiKind, detect_ci
from shadow_engine.config import ResolvedConfig, ShadowConfig
from shadow_engine.emit.generator import emit
from shadow_engine.emit.hook import run_hook
from shadow_engine.emit.version import VersionDefs, resolve_version
from shadow_engine.env import EnvSnapshot
from shadow_engine.errors import ArtifactIOError
from shadow_engine.git.reader import read_git
from shadow_engine.registry.consts import canonical_key
from shadow_engine.registry.merge import Registry, filter_deny, merge
from shadow_engine.sources.project import project_consts
from shadow_engine.sources.system import read_overrides, read_system

logger = logging.getLogger(__name__)


def collect(
    src_path: Path | str,
    env: EnvSnapshot,
    deny: frozenset[str] = frozenset(),
) -> tuple[CiKind, Registry]:
    """Query every source and return the detected CI kind and merged registry.

    Sources are merged git → project → system (then SHADOW_<KEY>
    overrides); a later source wins on a shared identifier. The deny list
    is not applied here, only used to skip expensive system facts.
    """
    ci_kind = detect_ci(env)
    registry = merge(
        read_git(src_path, ci_kind, env),
        project_consts(src_path, env),
        read_system(env, deny),
    )
    overrides = read_overrides(registry, env)
    if overrides:
        registry = merge(registry, overrides)
    return ci_kind, registry


@dataclass
class Shadow:
    """Outcome of a completed generation run."""

    artifact: Path
    registry: Registry
    deny_const: frozenset[str]
    build_pattern: BuildPattern
    ci_kind: CiKind
    version_defs: VersionDefs
    directives: tuple[RerunDirective, ...]
    hook_result: Any = None

    def deny_contains(self, key: str) -> bool:
        """Whether ``key`` was on the deny list for this run."""
        return canonical_key(key) in self.deny_const

    @classmethod
    def build(cls, config: ShadowConfig | None = None, now: datetime | None = None) -> Shadow:
        """Run the whole pipeline and write the artifact.

        Args:
            config: Run configuration; defaults resolve from the environment.
            now: Generation timestamp for the header (default: current time).

        Raises:
            EnvError: Configuration could not be resolved (nothing written).
            MalformedConstant: A constant's raw text disagrees with its kind.
            ArtifactIOError: The artifact could not be created or written.
        """
        resolved = (config or ShadowConfig()).validate()
        return cls._run(resolved, now)

    @classmethod
    def _run(cls, cfg: ResolvedConfig, now: datetime | None) -> Shadow:
        ci_kind, merged = collect(cfg.src_path, cfg.env, cfg.deny_const)
        registry = filter_deny(merged, cfg.deny_const)

        version_defs = resolve_version(registry)
        directives = select_triggers(cfg.build_pattern, registry.keys(), cfg.out_path)

        try:
            fp = open(cfg.artifact, "w", encoding="utf-8")
        except OSError as e:
            raise ArtifactIOError(f"Cannot create {cfg.artifact}: {e}") from e

        hook_result = None
        with fp:
            emit(fp, registry, version_defs, directives, now=now)
            if cfg.hook is not None:
                hook_result = run_hook(fp, cfg.hook)
        logger.debug("wrote %s (%d constants)", cfg.artifact, len(registry))

        return cls(
            artifact=cfg.artifact,
            registry=registry,
            deny_const=cfg.deny_const,
            build_pattern=cfg.build_pattern,
            ci_kind=ci_kind,
            version_defs=version_defs,
            directives=directives,
            hook_result=hook_result,
        )
