"""Git module — read-only version-control facts for the registry."""

from shadow_engine.git.reader import read_git

__all__ = ["read_git"]
