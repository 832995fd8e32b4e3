"""Known-constant listing."""

import argparse

from shadow_engine.registry.consts import known_consts


def cmd_consts(args: argparse.Namespace) -> int:
    known = known_consts()
    width = max(len(k) for k in known)
    print(f"\n  {len(known)} constants")
    print(f"  {'─' * 60}")
    for key, (kind, desc) in known.items():
        print(f"  {key.upper():<{width + 2}}{kind.annotation:<7}{desc}")
    print()
    return 0
