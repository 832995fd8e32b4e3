"""Generation-run configuration.

``ShadowConfig`` gathers every input of a run as named optional fields.
``validate()`` resolves it against the environment snapshot before the
pipeline writes anything. ``load_config`` reads the same fields from a
``shadow.yaml`` file:

    src_path: .
    out_path: src/myapp
    deny_const: [dependency_tree, package_metadata]
    build_pattern: custom
    rerun_keys: [commit_hash]
    rerun_paths: [pyproject.toml]
    rerun_envs: [RELEASE_CHANNEL]
    hook: myapp.build_hooks:append_consts

Relative paths in the file are resolved against the file's directory.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

from shadow_engine import paths
from shadow_engine.build.pattern import CUSTOM, PATTERN_NAMES, BuildPattern
from shadow_engine.emit.hook import Hook, load_hook
from shadow_engine.env import EnvSnapshot
from shadow_engine.errors import EnvError
from shadow_engine.registry.consts import canonical_key

_CONFIG_KEYS = {
    "src_path",
    "out_path",
    "deny_const",
    "build_pattern",
    "rerun_keys",
    "rerun_paths",
    "rerun_envs",
    "hook",
}


@dataclass(frozen=True)
class ResolvedConfig:
    """A validated configuration with concrete paths."""

    src_path: Path
    out_path: Path
    artifact: Path
    env: EnvSnapshot
    deny_const: frozenset[str]
    build_pattern: BuildPattern
    hook: Hook | None


@dataclass(frozen=True)
class ShadowConfig:
    """Inputs of one generation run.

    Attributes:
        src_path: Source checkout root. Default: SHADOW_SRC_DIR.
        out_path: Directory receiving shadow.py. Default: SHADOW_OUT_DIR, then OUT_DIR.
        deny_const: Identifiers excluded from the registry and all output.
        build_pattern: Rebuild-trigger policy. Default: lazy.
        hook: Called with the open artifact after core emission.
        env: Environment snapshot. Default: captured when validated.
    """

    src_path: Path | str | None = None
    out_path: Path | str | None = None
    deny_const: frozenset[str] = field(default_factory=frozenset)
    build_pattern: BuildPattern = field(default_factory=BuildPattern.lazy)
    hook: Hook | None = None
    env: EnvSnapshot | None = None

    def with_src_path(self, src_path: Path | str) -> ShadowConfig:
        return replace(self, src_path=src_path)

    def with_out_path(self, out_path: Path | str) -> ShadowConfig:
        return replace(self, out_path=out_path)

    def with_deny_const(self, keys: Iterable[str]) -> ShadowConfig:
        return replace(self, deny_const=self.deny_const | frozenset(canonical_key(k) for k in keys))

    def with_build_pattern(self, pattern: BuildPattern) -> ShadowConfig:
        return replace(self, build_pattern=pattern)

    def with_hook(self, hook: Hook) -> ShadowConfig:
        return replace(self, hook=hook)

    def with_env(self, env: EnvSnapshot) -> ShadowConfig:
        return replace(self, env=env)

    def validate(self) -> ResolvedConfig:
        """Resolve paths and check field types.

        Raises:
            EnvError: A path cannot be resolved or a field is invalid.
        """
        env = self.env if self.env is not None else EnvSnapshot.capture()

        bad = [k for k in self.deny_const if not isinstance(k, str) or not k.strip()]
        if bad:
            raise EnvError(f"deny_const entries must be non-empty strings: {bad!r}")
        if not isinstance(self.build_pattern, BuildPattern):
            raise EnvError(f"build_pattern must be a BuildPattern, got {type(self.build_pattern).__name__}")
        if self.hook is not None and not callable(self.hook):
            raise EnvError("hook must be callable")

        src = paths.src_dir(self.src_path, env)
        out = paths.out_dir(self.out_path, env)
        if not out.is_dir():
            raise EnvError(f"Output directory not found: {out}")

        return ResolvedConfig(
            src_path=src,
            out_path=out,
            artifact=paths.artifact_path(out),
            env=env,
            deny_const=frozenset(canonical_key(k) for k in self.deny_const),
            build_pattern=self.build_pattern,
            hook=self.hook,
        )


def load_config(path: Path | str) -> ShadowConfig:
    """Read a shadow.yaml file into a ShadowConfig.

    Raises:
        EnvError: The file is missing, not a mapping, or has unknown or
            mistyped keys.
    """
    config_path = Path(path)
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise EnvError(f"Cannot read config {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise EnvError(f"Malformed YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise EnvError(f"{config_path} is not a YAML mapping")

    unknown = set(data) - _CONFIG_KEYS
    if unknown:
        raise EnvError(f"Unknown keys in {config_path}: {', '.join(sorted(unknown))}")

    base = config_path.parent
    kwargs: dict = {}
    for key in ("src_path", "out_path"):
        if data.get(key):
            kwargs[key] = base / str(data[key])

    kwargs["deny_const"] = frozenset(canonical_key(k) for k in _str_list(data, "deny_const", config_path))

    name = str(data.get("build_pattern", "lazy")).lower()
    if name not in PATTERN_NAMES:
        raise EnvError(f"Unknown build_pattern '{name}' in {config_path}. Valid: {', '.join(PATTERN_NAMES)}")
    if name == CUSTOM:
        kwargs["build_pattern"] = BuildPattern.custom(
            _str_list(data, "rerun_keys", config_path),
            paths=[base / p for p in _str_list(data, "rerun_paths", config_path)],
            envs=_str_list(data, "rerun_envs", config_path),
        )
    else:
        kwargs["build_pattern"] = BuildPattern(name)

    if data.get("hook"):
        kwargs["hook"] = load_hook(str(data["hook"]))

    return ShadowConfig(**kwargs)


def _str_list(data: dict, key: str, source: Path) -> list[str]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise EnvError(f"'{key}' in {source} must be a list of strings")
    return value
