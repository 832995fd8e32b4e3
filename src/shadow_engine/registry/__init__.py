"""Registry module — typed constants, known identifiers, merge and deny filtering."""

from shadow_engine.registry.merge import Registry, filter_deny, merge
from shadow_engine.registry.model import ConstKind, ConstValue

__all__ = [
    "ConstKind",
    "ConstValue",
    "Registry",
    "merge",
    "filter_deny",
]
