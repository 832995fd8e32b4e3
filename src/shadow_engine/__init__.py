"""shadow-engine — bake build-time facts into a generated Python module.

Collects git, CI, project and environment facts into one ordered
registry of typed constants, then writes a ``shadow.py`` module exposing
them along with ``VERSION``, ``CLI_LONG_VERSION``, ``print_build_in()``
and ``package_metadata()``.

Typical use from a build step:

    from shadow_engine import Shadow, ShadowConfig

    Shadow.build(ShadowConfig(src_path=".", out_path="src/myapp"))
"""

from shadow_engine.build.pattern import BuildPattern
from shadow_engine.config import ShadowConfig, load_config
from shadow_engine.errors import ArtifactIOError, EnvError, MalformedConstant, ShadowError
from shadow_engine.pipeline import Shadow

__version__ = "0.4.0"

__all__ = [
    "BuildPattern",
    "Shadow",
    "ShadowConfig",
    "load_config",
    "ShadowError",
    "EnvError",
    "MalformedConstant",
    "ArtifactIOError",
]
