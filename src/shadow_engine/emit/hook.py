"""Caller-supplied extension of the generated module.

The hook borrows the still-open output stream after core emission and may
append any further definitions. What it writes is never merged into the
registry.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import Any, TextIO

from shadow_engine.emit import templates
from shadow_engine.errors import ArtifactIOError, EnvError

Hook = Callable[[TextIO], Any]


def run_hook(fp: TextIO, hook: Hook) -> Any:
    """Write the custom-section banner, then call ``hook(fp)``.

    Returns whatever the hook returns; exceptions raised by the hook
    propagate unchanged.
    """
    try:
        fp.write(templates.HOOK_BANNER)
    except OSError as e:
        raise ArtifactIOError(f"Failed writing hook banner: {e}") from e
    return hook(fp)


def load_hook(ref: str) -> Hook:
    """Resolve a ``"package.module:function"`` reference to a callable."""
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise EnvError(f"Invalid hook reference '{ref}': expected 'module:function'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise EnvError(f"Cannot import hook module '{module_name}': {e}") from e
    fn = getattr(module, attr, None)
    if not callable(fn):
        raise EnvError(f"Hook '{ref}' is not a callable")
    return fn
