"""Command-line interface for shadow-engine.

Usage:
    shadow generate [--src P] [--out P] [--config F] [--deny KEY]...
                    [--pattern lazy|realtime|custom] [--rerun-key KEY]...
                    [--rerun-path P]... [--rerun-env VAR]... [--hook module:function]
    shadow show [--src P] [--deny KEY]... [--json]
    shadow consts
"""

import argparse
import logging
import sys

from shadow_engine.build.pattern import PATTERN_NAMES
from shadow_engine.cli.consts import cmd_consts
from shadow_engine.cli.generate import cmd_generate, cmd_show
from shadow_engine.errors import ShadowError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shadow",
        description="Bake build-time git, project and environment facts into a Python module",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debug output to stderr",
    )
    sub = parser.add_subparsers(dest="command")

    # generate
    gen = sub.add_parser("generate", help="Write shadow.py")
    gen.add_argument("--src", default=None, help="Source checkout root (default: SHADOW_SRC_DIR or .)")
    gen.add_argument("--out", default=None, help="Output directory (default: SHADOW_OUT_DIR or OUT_DIR)")
    gen.add_argument("--config", default=None, help="Path to shadow.yaml (default: <src>/shadow.yaml)")
    gen.add_argument(
        "--deny", action="append", default=[], metavar="KEY",
        help="Exclude a constant (repeatable)",
    )
    gen.add_argument(
        "--pattern", choices=PATTERN_NAMES, default=None,
        help="Rebuild-trigger policy",
    )
    gen.add_argument(
        "--rerun-key", action="append", default=[], metavar="KEY",
        help="Constant whose override triggers a re-run (custom pattern)",
    )
    gen.add_argument(
        "--rerun-path", action="append", default=[], metavar="PATH",
        help="File whose change triggers a re-run (custom pattern)",
    )
    gen.add_argument(
        "--rerun-env", action="append", default=[], metavar="VAR",
        help="Environment variable whose change triggers a re-run (custom pattern)",
    )
    gen.add_argument("--hook", default=None, metavar="MODULE:FUNCTION", help="Append custom definitions")

    # show
    show = sub.add_parser("show", help="Print the collected constants without writing")
    show.add_argument("--src", default=None, help="Source checkout root (default: SHADOW_SRC_DIR or .)")
    show.add_argument(
        "--deny", action="append", default=[], metavar="KEY",
        help="Exclude a constant (repeatable)",
    )
    show.add_argument("--json", action="store_true", help="Output as JSON")

    # consts
    sub.add_parser("consts", help="List every known constant")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "generate": cmd_generate,
        "show": cmd_show,
        "consts": cmd_consts,
    }

    try:
        return dispatch[args.command](args)
    except ShadowError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
