"""Emit module — turn a filtered registry into the generated ``shadow.py``.

The artifact is laid out in a fixed order:
    header banner + generation time
    rebuild-trigger directives (as comments)
    one typed definition per constant, sorted by identifier
    VERSION / CLI_LONG_VERSION
    print_build_in()
    package_metadata()
    [custom hook section]
"""

from shadow_engine.emit.generator import emit, format_const
from shadow_engine.emit.hook import run_hook
from shadow_engine.emit.version import VersionDefs, resolve_version

__all__ = ["emit", "format_const", "run_hook", "VersionDefs", "resolve_version"]
