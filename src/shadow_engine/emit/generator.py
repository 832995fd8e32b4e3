"""Serialize a filtered registry into the generated module.

``format_const`` is the single place that turns a typed constant into
source text; ``emit`` writes every section once, in order, to an open
text stream. Write failures surface as ``ArtifactIOError`` and leave the
partially written file behind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import TextIO

from shadow_engine.build.pattern import RerunDirective
from shadow_engine.emit import templates
from shadow_engine.emit.version import VersionDefs
from shadow_engine.errors import ArtifactIOError, MalformedConstant
from shadow_engine.registry import consts as c
from shadow_engine.registry.model import ConstKind, ConstValue

logger = logging.getLogger(__name__)

_BOOL_LITERALS = {"true": True, "false": False}


def parse_bool(name: str, raw: str) -> bool:
    """Parse a Bool constant's raw text; anything but true/false is fatal."""
    try:
        return _BOOL_LITERALS[raw.strip().lower()]
    except KeyError:
        raise MalformedConstant(name, ConstKind.BOOL.name, raw) from None


def str_literal(raw: str) -> str:
    """Raw triple-quoted literal when ``raw`` survives one unchanged, else repr()."""
    unsafe = (
        '"""' in raw
        or raw.endswith(('"', "\\"))
        or any(ch < " " and ch not in "\n\t" for ch in raw)
        or "\x7f" in raw
    )
    if unsafe:
        return repr(raw)
    return f'r"""{raw}"""'


def literal(name: str, value: ConstValue) -> str:
    """Source literal for ``value`` according to its kind."""
    try:
        value.raw.encode("utf-8")
    except UnicodeEncodeError:
        # Undecodable environment bytes arrive as lone surrogates
        raise MalformedConstant(name, value.kind.name, value.raw) from None
    if value.kind is ConstKind.STR:
        return str_literal(value.raw)
    if value.kind is ConstKind.BOOL:
        return repr(parse_bool(name, value.raw))
    if value.kind is ConstKind.BYTE_SLICE:
        return repr(value.raw.encode("utf-8"))
    raise MalformedConstant(name, str(value.kind), value.raw)


def format_const(name: str, value: ConstValue) -> str:
    """Documentation comment plus typed definition for one constant."""
    doc_lines = value.description.splitlines() or [""]
    doc = "".join(templates.DOC_LINE.format(line=line).rstrip() + "\n" for line in doc_lines)
    definition = templates.CONST_DEFINITION.format(
        name=name.upper(),
        annotation=value.kind.annotation,
        literal=literal(name, value),
    )
    return doc + definition


def emit(
    fp: TextIO,
    registry: Mapping[str, ConstValue],
    version_defs: VersionDefs,
    directives: Iterable[RerunDirective] = (),
    now: datetime | None = None,
) -> None:
    """Write the generated module to ``fp``.

    Args:
        fp: Open, writable text stream (owned by the caller).
        registry: Deny-filtered registry, read in sorted key order.
        version_defs: Definitions chosen by ``resolve_version``.
        directives: Rebuild-trigger directives, recorded as comments.
        now: Generation timestamp; defaults to the current UTC time.

    Raises:
        MalformedConstant: A constant's raw text does not match its kind.
        ArtifactIOError: Writing to ``fp`` failed.
    """
    keys = sorted(registry)
    stamp = format_datetime(now or datetime.now(timezone.utc))

    try:
        fp.write(templates.HEADER.format(timestamp=stamp) + "\n")
        fp.write("".join(templates.DIRECTIVE_LINE.format(directive=d.render()) for d in directives) + "\n")
        for key in keys:
            fp.write(format_const(key, registry[key]) + "\n")
        fp.write(version_defs.version + "\n" + version_defs.cli_long_version + "\n")
        fp.write(_print_build_in(registry, keys, version_defs) + "\n")
        fp.write(_package_metadata_fn(registry))
    except (OSError, UnicodeError) as e:
        raise ArtifactIOError(f"Failed writing generated module: {e}") from e
    logger.debug("emitted %d constants", len(keys))


def _print_build_in(registry: Mapping[str, ConstValue], keys: list[str], version_defs: VersionDefs) -> str:
    lines = []
    for key in keys:
        tmpl = templates.PRINT_LINE_REPR if registry[key].kind is ConstKind.BYTE_SLICE else templates.PRINT_LINE
        lines.append(tmpl.format(name=key.upper()))
    for name in version_defs.names:
        lines.append(templates.PRINT_LINE.format(name=name))
    return templates.PRINT_BUILD_IN.format(body="".join(lines).rstrip("\n"))


def _package_metadata_fn(registry: Mapping[str, ConstValue]) -> str:
    meta = registry.get(c.PACKAGE_METADATA)
    if meta is not None and meta.kind is ConstKind.BYTE_SLICE:
        return templates.PACKAGE_METADATA_FN.format(name=c.PACKAGE_METADATA.upper())
    return templates.PACKAGE_METADATA_EMPTY_FN
