"""Text templates for the generated module.

Templates use str.format() with named placeholders; literal braces
destined for generated f-strings are doubled.
"""

from __future__ import annotations

# ── Header ────────────────────────────────────────────────────────

HEADER = """\
# Code automatically generated by shadow-engine, do not edit.
# Generation time: {timestamp}
# ruff: noqa
# flake8: noqa
"""

DIRECTIVE_LINE = "# {directive}\n"

# ── Constants ─────────────────────────────────────────────────────

DOC_LINE = "#: {line}"

CONST_DEFINITION = "{name}: {annotation} = {literal}  # noqa\n"

# ── Version constants ─────────────────────────────────────────────

VERSION_DEFINITION = '''\
#: Long version string, one 'label:value' fact per line.
VERSION: str = f"""{body}"""  # noqa
'''

CLI_LONG_VERSION_DEFINITION = '''\
#: Version text for ``argparse``'s ``action="version"`` (package version first).
CLI_LONG_VERSION: str = f"""{body}"""  # noqa
'''

# ── Functions ─────────────────────────────────────────────────────

PRINT_BUILD_IN = '''\
def print_build_in() -> None:  # noqa
    """Print every build constant as 'NAME:value', one per line."""
{body}
'''

PRINT_LINE = '    print(f"{name}:{{{name}}}")\n'

PRINT_LINE_REPR = '    print(f"{name}:{{{name}!r}}")\n'

PACKAGE_METADATA_FN = '''\
def package_metadata() -> list:  # noqa
    """Installed distributions recorded at build time (name/version dicts)."""
    import json

    return json.loads({name}.decode("utf-8"))
'''

PACKAGE_METADATA_EMPTY_FN = '''\
def package_metadata() -> list:  # noqa
    """Installed distributions recorded at build time (not collected)."""
    return []
'''

# ── Hook ──────────────────────────────────────────────────────────

HOOK_BANNER = "\n# Below code generated by project custom hook\n\n"
