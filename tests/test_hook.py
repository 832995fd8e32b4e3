"""Tests for the custom hook section."""

import io
import sys
import types

import pytest
from conftest import load_generated

from shadow_engine.emit.generator import emit
from shadow_engine.emit.hook import load_hook, run_hook
from shadow_engine.emit.version import resolve_version
from shadow_engine.errors import EnvError


def append_hook_consts(fp):
    fp.write('HOOK_CONST: str = "hello hook const"\n\n')
    fp.write("def hook_fn() -> str:\n    return HOOK_CONST\n")


class TestRunHook:
    def test_banner_then_hook_output(self):
        buf = io.StringIO()
        run_hook(buf, append_hook_consts)
        text = buf.getvalue()
        assert text.index("# Below code generated by project custom hook") < text.index("HOOK_CONST")

    def test_returns_hook_result(self):
        assert run_hook(io.StringIO(), lambda fp: 42) == 42

    def test_hook_exception_propagates(self):
        def boom(fp):
            raise RuntimeError("hook failed")

        with pytest.raises(RuntimeError, match="hook failed"):
            run_hook(io.StringIO(), boom)

    def test_hook_appends_after_core_emission(self, small_registry):
        buf = io.StringIO()
        emit(buf, small_registry, resolve_version(small_registry))
        run_hook(buf, append_hook_consts)
        text = buf.getvalue()
        assert text.index("def package_metadata") < text.index("HOOK_CONST")
        ns = load_generated(text)
        assert ns["HOOK_CONST"] == "hello hook const"
        assert ns["hook_fn"]() == ns["HOOK_CONST"]


class TestLoadHook:
    @pytest.fixture
    def hook_module(self, monkeypatch):
        mod = types.ModuleType("fake_build_hooks")
        mod.append = append_hook_consts
        mod.not_callable = "x"
        monkeypatch.setitem(sys.modules, "fake_build_hooks", mod)
        return mod

    def test_resolves_callable(self, hook_module):
        assert load_hook("fake_build_hooks:append") is append_hook_consts

    @pytest.mark.parametrize("ref", ["fake_build_hooks", ":append", "fake_build_hooks:"])
    def test_malformed_reference(self, hook_module, ref):
        with pytest.raises(EnvError, match="Invalid hook reference"):
            load_hook(ref)

    def test_missing_module(self):
        with pytest.raises(EnvError, match="Cannot import"):
            load_hook("no_such_module_for_shadow_tests:fn")

    def test_not_callable(self, hook_module):
        with pytest.raises(EnvError, match="not a callable"):
            load_hook("fake_build_hooks:not_callable")
