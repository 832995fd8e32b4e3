"""Generation CLI commands."""

import argparse
import json

from shadow_engine import paths
from shadow_engine.build.pattern import CUSTOM, BuildPattern
from shadow_engine.config import ShadowConfig, load_config
from shadow_engine.emit.hook import load_hook
from shadow_engine.env import EnvSnapshot
from shadow_engine.registry.consts import canonical_key
from shadow_engine.registry.merge import filter_deny


def _src(args: argparse.Namespace, env: EnvSnapshot) -> str:
    return args.src or env.get("SHADOW_SRC_DIR") or "."


def _config_from_args(args: argparse.Namespace, env: EnvSnapshot) -> ShadowConfig:
    """Config file (explicit or <src>/shadow.yaml) overlaid with CLI flags."""
    src = _src(args, env)
    if args.config:
        config = load_config(args.config)
    else:
        default = paths.config_path(src, env)
        config = load_config(default) if default.is_file() else ShadowConfig()

    if args.src or config.src_path is None:
        config = config.with_src_path(src)
    if args.out:
        config = config.with_out_path(args.out)
    if args.deny:
        config = config.with_deny_const(args.deny)

    rerun = args.rerun_key or args.rerun_path or args.rerun_env
    name = args.pattern or (CUSTOM if rerun else None)
    if name == CUSTOM:
        # Flags add to a custom pattern already loaded from the config file
        base = config.build_pattern if config.build_pattern.name == CUSTOM else BuildPattern.custom(())
        config = config.with_build_pattern(
            base.extend(args.rerun_key, paths=args.rerun_path, envs=args.rerun_env),
        )
    elif name:
        config = config.with_build_pattern(BuildPattern(name))

    if args.hook:
        config = config.with_hook(load_hook(args.hook))
    return config.with_env(env)


def cmd_generate(args: argparse.Namespace) -> int:
    from shadow_engine.pipeline import Shadow

    env = EnvSnapshot.capture()
    shadow = Shadow.build(_config_from_args(args, env))

    for directive in shadow.directives:
        print(directive.render())
    print(f"  Wrote {shadow.artifact}")
    print(f"  Constants: {len(shadow.registry)}")
    print(f"  Version:   {shadow.version_defs.strategy}-based")
    if shadow.deny_const:
        print(f"  Denied:    {', '.join(sorted(shadow.deny_const))}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    from shadow_engine.pipeline import collect

    env = EnvSnapshot.capture()
    src = paths.src_dir(_src(args, env), env)
    deny = frozenset(canonical_key(k) for k in args.deny)
    ci_kind, merged = collect(src, env, deny)
    registry = filter_deny(merged, deny)

    if args.json:
        print(json.dumps({
            "ci": ci_kind.value,
            "constants": {
                k.upper(): {"kind": v.kind.annotation, "value": v.raw, "description": v.description}
                for k, v in registry.items()
            },
        }, indent=2))
        return 0

    print(f"\n  CI: {ci_kind.value}")
    print(f"  {'─' * 60}")
    for key, value in registry.items():
        first = value.raw.splitlines()[0][:80] if value.raw else ""
        more = " …" if "\n" in value.raw else ""
        print(f"  {key.upper() + ':':<26}{first}{more}")
    print()
    return 0
