"""Known constant identifiers and their default (placeholder) values.

Identifiers are lower-case here and upper-cased only when emitted.
Grouped by the source that produces them.
"""

from __future__ import annotations

from shadow_engine.registry.model import ConstKind, ConstValue

# ── Git ──────────────────────────────────────────────────────────

BRANCH = "branch"
TAG = "tag"
LAST_TAG = "last_tag"
COMMITS_SINCE_TAG = "commits_since_tag"
COMMIT_HASH = "commit_hash"
SHORT_COMMIT = "short_commit"
COMMIT_DATE = "commit_date"
COMMIT_DATE_2822 = "commit_date_2822"
COMMIT_DATE_3339 = "commit_date_3339"
COMMIT_AUTHOR = "commit_author"
COMMIT_EMAIL = "commit_email"
GIT_CLEAN = "git_clean"
GIT_STATUS_FILE = "git_status_file"

# ── Project ──────────────────────────────────────────────────────

PROJECT_NAME = "project_name"
PKG_VERSION = "pkg_version"
PKG_VERSION_MAJOR = "pkg_version_major"
PKG_VERSION_MINOR = "pkg_version_minor"
PKG_VERSION_PATCH = "pkg_version_patch"
PKG_VERSION_PRE = "pkg_version_pre"
PKG_DESCRIPTION = "pkg_description"
BUILD_TIME = "build_time"
BUILD_TIME_2822 = "build_time_2822"
BUILD_TIME_3339 = "build_time_3339"
BUILD_MODE = "build_mode"

# ── System environment ───────────────────────────────────────────

BUILD_OS = "build_os"
BUILD_TARGET = "build_target"
BUILD_TARGET_ARCH = "build_target_arch"
PYTHON_VERSION = "python_version"
PYTHON_IMPLEMENTATION = "python_implementation"
PIP_VERSION = "pip_version"
DEPENDENCY_TREE = "dependency_tree"
PACKAGE_METADATA = "package_metadata"

# Names of the generated version definitions (not registry entries)
VERSION = "VERSION"
CLI_LONG_VERSION = "CLI_LONG_VERSION"

GIT_DEFAULTS: dict[str, ConstValue] = {
    BRANCH: ConstValue.string("", "git current branch"),
    TAG: ConstValue.string("", "git tag pointing at the current commit, empty when untagged"),
    LAST_TAG: ConstValue.string("", "most recent git tag reachable from the current commit"),
    COMMITS_SINCE_TAG: ConstValue.string("", "number of commits since last_tag"),
    COMMIT_HASH: ConstValue.string("", "full commit hash"),
    SHORT_COMMIT: ConstValue.string("", "abbreviated commit hash"),
    COMMIT_DATE: ConstValue.string("", "commit date, 'YYYY-MM-DD HH:MM:SS +ZZZZ'"),
    COMMIT_DATE_2822: ConstValue.string("", "commit date, RFC 2822"),
    COMMIT_DATE_3339: ConstValue.string("", "commit date, RFC 3339"),
    COMMIT_AUTHOR: ConstValue.string("", "commit author name"),
    COMMIT_EMAIL: ConstValue.string("", "commit author email"),
    GIT_CLEAN: ConstValue.boolean(True, "whether the work tree had no uncommitted changes"),
    GIT_STATUS_FILE: ConstValue.string("", "uncommitted files with their porcelain status, one per line"),
}

PROJECT_DESCRIPTIONS: dict[str, str] = {
    PROJECT_NAME: "project name from pyproject.toml",
    PKG_VERSION: "full project version",
    PKG_VERSION_MAJOR: "major version component",
    PKG_VERSION_MINOR: "minor version component",
    PKG_VERSION_PATCH: "patch version component",
    PKG_VERSION_PRE: "pre-release / local suffix of the version",
    PKG_DESCRIPTION: "project summary",
    BUILD_TIME: "build time, 'YYYY-MM-DD HH:MM:SS +ZZZZ'",
    BUILD_TIME_2822: "build time, RFC 2822",
    BUILD_TIME_3339: "build time, RFC 3339",
    BUILD_MODE: "build mode (debug or release)",
}

SYSTEM_DESCRIPTIONS: dict[str, str] = {
    BUILD_OS: "operating system and architecture of the build host",
    BUILD_TARGET: "platform tag of the build interpreter",
    BUILD_TARGET_ARCH: "machine architecture of the build host",
    PYTHON_VERSION: "interpreter version",
    PYTHON_IMPLEMENTATION: "interpreter implementation",
    PIP_VERSION: "installed pip version, empty when pip is absent",
    DEPENDENCY_TREE: "installed distributions, 'name==version' per line",
    PACKAGE_METADATA: "installed distributions as JSON",
}

SYSTEM_KINDS: dict[str, ConstKind] = {
    PACKAGE_METADATA: ConstKind.BYTE_SLICE,
}


def known_consts() -> dict[str, tuple[ConstKind, str]]:
    """Every identifier a default run can produce, with kind and description."""
    known: dict[str, tuple[ConstKind, str]] = {}
    for key, value in GIT_DEFAULTS.items():
        known[key] = (value.kind, value.description)
    for key, desc in PROJECT_DESCRIPTIONS.items():
        known[key] = (ConstKind.STR, desc)
    for key, desc in SYSTEM_DESCRIPTIONS.items():
        known[key] = (SYSTEM_KINDS.get(key, ConstKind.STR), desc)
    return dict(sorted(known.items()))


OVERRIDE_PREFIX = "SHADOW_"


def override_var(key: str) -> str:
    """Environment variable that overrides constant ``key`` (SHADOW_<KEY>)."""
    return OVERRIDE_PREFIX + key.upper()


def canonical_key(name: str) -> str:
    """Registry identifier for ``name``; accepts the upper-case emitted form."""
    return name.strip().lower()
