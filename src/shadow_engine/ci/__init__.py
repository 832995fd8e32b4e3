"""CI module — classify the CI system a build runs under."""

from shadow_engine.ci.detect import CiKind, detect_ci

__all__ = ["CiKind", "detect_ci"]
