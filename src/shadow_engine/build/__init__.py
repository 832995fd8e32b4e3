"""Build module — rebuild-trigger policy and directive selection."""

from shadow_engine.build.pattern import BuildPattern, RerunDirective, select_triggers

__all__ = ["BuildPattern", "RerunDirective", "select_triggers"]
