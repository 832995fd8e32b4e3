"""Read git facts for a source checkout.

Every git identifier is always present in the result: values start as
placeholders and are filled in from ``git`` where possible. A checkout
that is not a git work tree (or a host without ``git``) yields the
placeholders unchanged.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping
from datetime import datetime
from email.utils import format_datetime
from pathlib import Path

from shadow_engine.ci.detect import CiKind
from shadow_engine.registry import consts as c
from shadow_engine.registry.model import ConstValue

logger = logging.getLogger(__name__)

_REF_HEADS = "refs/heads/"
_REF_TAGS = "refs/tags/"


def _run_git(args: list[str], cwd: Path) -> subprocess.CompletedProcess:
    """Run a git command and return the result."""
    return subprocess.run(
        ["git"] + args,
        cwd=cwd,
        capture_output=True,
        text=True,
    )


def _git_out(args: list[str], cwd: Path) -> str | None:
    """Stripped stdout of a git command, or None when it failed."""
    result = _run_git(args, cwd)
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def read_git(
    src_path: Path | str,
    ci_kind: CiKind,
    env: Mapping[str, str],
) -> dict[str, ConstValue]:
    """Collect git facts for ``src_path``.

    Args:
        src_path: Source checkout root.
        ci_kind: Detected CI system; decides where branch/tag come from.
        env: Environment snapshot (CI variables are read from here).

    Returns:
        Mapping of every git identifier to its ConstValue.
    """
    facts = dict(c.GIT_DEFAULTS)
    cwd = Path(src_path)

    try:
        inside = _git_out(["rev-parse", "--is-inside-work-tree"], cwd)
    except OSError as e:
        logger.debug("git unavailable, using placeholders: %s", e)
        return facts
    if inside != "true":
        logger.debug("%s is not a git work tree, using placeholders", cwd)
        return facts

    def put(key: str, raw: str | None) -> None:
        if raw is not None:
            facts[key] = facts[key].with_raw(raw)

    put(c.BRANCH, _git_out(["symbolic-ref", "--short", "HEAD"], cwd))
    put(c.COMMIT_HASH, _git_out(["rev-parse", "HEAD"], cwd))
    put(c.SHORT_COMMIT, _git_out(["rev-parse", "--short", "HEAD"], cwd))

    tags = _git_out(["tag", "-l", "--contains", "HEAD"], cwd)
    if tags:
        put(c.TAG, tags.splitlines()[0].strip())

    last_tag = _git_out(["describe", "--tags", "--abbrev=0", "HEAD"], cwd)
    if last_tag:
        put(c.LAST_TAG, last_tag)
        put(c.COMMITS_SINCE_TAG, _git_out(["rev-list", "--count", f"{last_tag}..HEAD"], cwd))

    log = _git_out(["log", "-1", "--format=%cI%n%an%n%ae"], cwd)
    if log:
        lines = log.split("\n")
        if len(lines) >= 3:
            _put_commit_date(facts, lines[0])
            put(c.COMMIT_AUTHOR, lines[1])
            put(c.COMMIT_EMAIL, lines[2])

    # Porcelain lines start with a significant space; only trim the tail
    status = _run_git(["status", "--porcelain"], cwd)
    if status.returncode == 0:
        porcelain = status.stdout.rstrip()
        put(c.GIT_CLEAN, "true" if not porcelain else "false")
        put(c.GIT_STATUS_FILE, _format_status(porcelain))

    _apply_ci_refs(facts, ci_kind, env)
    return facts


def _put_commit_date(facts: dict[str, ConstValue], iso: str) -> None:
    try:
        dt = datetime.fromisoformat(iso)
    except ValueError:
        logger.debug("unparsable commit date %r", iso)
        return
    facts[c.COMMIT_DATE] = facts[c.COMMIT_DATE].with_raw(dt.strftime("%Y-%m-%d %H:%M:%S %z"))
    facts[c.COMMIT_DATE_2822] = facts[c.COMMIT_DATE_2822].with_raw(format_datetime(dt))
    facts[c.COMMIT_DATE_3339] = facts[c.COMMIT_DATE_3339].with_raw(dt.isoformat())


def _format_status(porcelain: str) -> str:
    """Turn ``git status --porcelain`` output into 'path (state)' lines."""
    out = []
    for line in porcelain.splitlines():
        if len(line) < 4:
            continue
        code, path = line[:2], line[3:]
        if code == "??":
            state = "untracked"
        elif code[0] != " ":
            state = "staged"
        else:
            state = "dirty"
        out.append(f"{path} ({state})")
    return "\n".join(out)


def _apply_ci_refs(facts: dict[str, ConstValue], ci_kind: CiKind, env: Mapping[str, str]) -> None:
    """Override branch/tag from CI variables (CI checkouts are detached)."""
    branch = tag = None
    if ci_kind is CiKind.GITLAB:
        if env.get("CI_COMMIT_TAG"):
            tag = env["CI_COMMIT_TAG"]
        elif env.get("CI_COMMIT_REF_NAME"):
            branch = env["CI_COMMIT_REF_NAME"]
    elif ci_kind is CiKind.GITHUB:
        ref = env.get("GITHUB_REF", "")
        if ref.startswith(_REF_HEADS):
            branch = ref[len(_REF_HEADS):]
        elif ref.startswith(_REF_TAGS):
            tag = ref[len(_REF_TAGS):]

    if branch:
        facts[c.BRANCH] = facts[c.BRANCH].with_raw(branch)
    if tag:
        facts[c.TAG] = facts[c.TAG].with_raw(tag)
        facts[c.LAST_TAG] = facts[c.LAST_TAG].with_raw(tag)
