"""Shared test fixtures for shadow-engine."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from shadow_engine.env import EnvSnapshot
from shadow_engine.registry.model import ConstValue

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")

# 2021-01-01T00:00:00Z
FIXED_EPOCH = "1609459200"


def git(repo: Path, *args: str, home: Path) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env.update({
        "GIT_AUTHOR_NAME": "test", "GIT_AUTHOR_EMAIL": "t@t",
        "GIT_COMMITTER_NAME": "test", "GIT_COMMITTER_EMAIL": "t@t",
        "HOME": str(home), "GIT_CONFIG_NOSYSTEM": "1",
    })
    return subprocess.run(["git", *args], cwd=repo, capture_output=True, text=True, env=env, check=True)


def load_generated(text: str) -> dict:
    """Compile and execute generated module text, returning its namespace."""
    ns: dict = {}
    exec(compile(text, "shadow.py", "exec"), ns)
    return ns


@pytest.fixture
def env():
    return EnvSnapshot({"SOURCE_DATE_EPOCH": FIXED_EPOCH})


@pytest.fixture
def project_dir(tmp_path):
    """A non-git source checkout with a pyproject.toml."""
    src = tmp_path / "proj"
    src.mkdir()
    (src / "pyproject.toml").write_text(
        '[project]\nname = "demo-app"\nversion = "1.4.2rc1"\ndescription = "Demo app"\n'
    )
    return src


@pytest.fixture
def git_home(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def git_repo(tmp_path, git_home):
    """A git repo on branch main with one commit."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", home=git_home)
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main", home=git_home)
    (repo / "pyproject.toml").write_text('[project]\nname = "repo-app"\nversion = "0.3.0"\n')
    git(repo, "add", ".", home=git_home)
    git(repo, "commit", "-m", "init", home=git_home)
    return repo


@pytest.fixture
def small_registry():
    return {
        "branch": ConstValue.string("main", "git current branch"),
        "commit_hash": ConstValue.string("abc123", "full commit hash"),
        "git_clean": ConstValue.boolean(True, "clean work tree"),
        "tag": ConstValue.string("", "git tag"),
    }
