"""Immutable process-environment snapshot.

Captured once at pipeline start and passed to every component that reads
environment variables, so nothing downstream touches ``os.environ``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from types import MappingProxyType


class EnvSnapshot(Mapping[str, str]):
    """Read-only view over a copy of environment variables."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None):
        self._data = MappingProxyType(dict(data or {}))

    @classmethod
    def capture(cls) -> EnvSnapshot:
        """Snapshot the current process environment."""
        return cls(os.environ)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"EnvSnapshot({len(self._data)} vars)"
