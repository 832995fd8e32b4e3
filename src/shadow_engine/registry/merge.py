"""Merge metadata sources into one ordered registry and apply the deny list.

Precedence is positional: sources are merged in the order given and a
later source overwrites an earlier one on the same identifier. The
pipeline merges git facts, then project metadata, then system facts.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from shadow_engine.registry.model import ConstValue

Registry = dict[str, ConstValue]

Source = Mapping[str, ConstValue] | Iterable[tuple[str, ConstValue]]


def merge(*sources: Source) -> Registry:
    """Merge sources last-writer-wins; return a registry sorted by identifier."""
    merged: dict[str, ConstValue] = {}
    for source in sources:
        pairs = source.items() if isinstance(source, Mapping) else source
        for key, value in pairs:
            merged[key] = value
    return dict(sorted(merged.items()))


def filter_deny(registry: Mapping[str, ConstValue], deny: Iterable[str]) -> Registry:
    """Return ``registry`` without any identifier in ``deny``.

    Order is preserved and values are untouched; filtering an already
    filtered registry is a no-op.
    """
    denied = set(deny)
    return {k: v for k, v in registry.items() if k not in denied}
