"""Metadata sources feeding the registry (project file and build host)."""

from shadow_engine.sources.project import project_consts, read_project
from shadow_engine.sources.system import read_overrides, read_system

__all__ = ["read_project", "project_consts", "read_system", "read_overrides"]
