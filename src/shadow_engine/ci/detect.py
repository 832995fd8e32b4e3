"""CI environment detection from an environment snapshot.

Only used to steer git metadata extraction (CI checkouts are often on a
detached HEAD, so branch and tag come from CI variables instead).
"""

from __future__ import annotations

import enum
from collections.abc import Mapping


class CiKind(enum.Enum):
    NONE = "none"
    GITHUB = "github"
    GITLAB = "gitlab"


# Checked in order; first match wins
_CI_SIGNALS: tuple[tuple[str, str, CiKind], ...] = (
    ("GITLAB_CI", "true", CiKind.GITLAB),
    ("GITHUB_ACTIONS", "true", CiKind.GITHUB),
)


def detect_ci(env: Mapping[str, str]) -> CiKind:
    """Return the CI kind signalled by ``env``; never fails."""
    for var, expected, kind in _CI_SIGNALS:
        if env.get(var) == expected:
            return kind
    return CiKind.NONE
