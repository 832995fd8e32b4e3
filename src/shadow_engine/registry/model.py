"""Typed constant values held by the registry."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ConstKind(enum.Enum):
    """Closed set of constant kinds; each maps to one emission template."""

    STR = "str"
    BOOL = "bool"
    BYTE_SLICE = "bytes"

    @property
    def annotation(self) -> str:
        """Python type annotation used in the generated module."""
        return self.value


@dataclass(frozen=True)
class ConstValue:
    """A constant's kind, canonical raw text and documentation line."""

    kind: ConstKind
    raw: str = ""
    description: str = ""

    @classmethod
    def string(cls, raw: str, description: str = "") -> ConstValue:
        return cls(ConstKind.STR, raw, description)

    @classmethod
    def boolean(cls, value: bool | str, description: str = "") -> ConstValue:
        raw = ("true" if value else "false") if isinstance(value, bool) else value
        return cls(ConstKind.BOOL, raw, description)

    @classmethod
    def byte_slice(cls, raw: str, description: str = "") -> ConstValue:
        return cls(ConstKind.BYTE_SLICE, raw, description)

    def with_raw(self, raw: str) -> ConstValue:
        """Return a copy carrying a different raw value."""
        return ConstValue(self.kind, raw, self.description)
