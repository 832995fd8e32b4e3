"""Error taxonomy for a generation run.

Every failure aborts the run; there is no partial-success mode.
Version-control read failures are not errors (they degrade to
placeholder facts) and CI detection never fails.
"""


class ShadowError(Exception):
    """Base class for all generation failures."""


class EnvError(ShadowError):
    """Required configuration or environment is missing or invalid.

    Raised before anything is written to the artifact.
    """


class MalformedConstant(ShadowError, ValueError):
    """A constant's declared kind disagrees with its raw text."""

    def __init__(self, name: str, kind: str, raw: str):
        self.name = name
        self.kind = kind
        self.raw = raw
        super().__init__(f"Constant '{name}' declared {kind} but raw value is {raw!r}")


class ArtifactIOError(ShadowError, OSError):
    """Creating or writing the generated artifact failed."""
