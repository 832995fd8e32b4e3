"""Tests for configuration, path resolution and shadow.yaml loading."""

from pathlib import Path

import pytest

from shadow_engine import paths
from shadow_engine.build.pattern import CUSTOM, REAL_TIME, BuildPattern
from shadow_engine.config import ShadowConfig, load_config
from shadow_engine.env import EnvSnapshot
from shadow_engine.errors import EnvError


class TestPaths:
    def test_explicit_out_wins(self, tmp_path):
        assert paths.out_dir(tmp_path, {"OUT_DIR": "/elsewhere"}) == tmp_path

    def test_shadow_out_dir_before_out_dir(self):
        assert paths.out_dir(None, {"SHADOW_OUT_DIR": "/a", "OUT_DIR": "/b"}) == Path("/a")

    def test_host_out_dir(self):
        assert paths.out_dir(None, {"OUT_DIR": "/b"}) == Path("/b")

    def test_no_out_dir(self):
        with pytest.raises(EnvError, match="No output directory"):
            paths.out_dir(None, {})

    def test_src_from_env(self, tmp_path):
        assert paths.src_dir(None, {"SHADOW_SRC_DIR": str(tmp_path)}) == tmp_path

    def test_src_missing(self):
        with pytest.raises(EnvError, match="No source directory"):
            paths.src_dir(None, {})

    def test_src_not_a_dir(self, tmp_path):
        with pytest.raises(EnvError, match="not found"):
            paths.src_dir(tmp_path / "nope", {})

    def test_artifact_name(self, tmp_path):
        assert paths.artifact_path(tmp_path) == tmp_path / "shadow.py"

    def test_config_path(self, tmp_path):
        assert paths.config_path(tmp_path, {}) == tmp_path / "shadow.yaml"
        assert paths.config_path(tmp_path, {"SHADOW_CONFIG": "/etc/s.yaml"}) == Path("/etc/s.yaml")


class TestShadowConfig:
    def test_defaults(self):
        cfg = ShadowConfig()
        assert cfg.deny_const == frozenset()
        assert cfg.build_pattern == BuildPattern.lazy()
        assert cfg.hook is None

    def test_with_setters_return_new_config(self, tmp_path):
        base = ShadowConfig()
        cfg = base.with_src_path(tmp_path).with_deny_const(["a"]).with_deny_const(["b"])
        assert base.src_path is None
        assert cfg.deny_const == {"a", "b"}

    def test_with_deny_const_accepts_emitted_names(self):
        assert ShadowConfig().with_deny_const(["PACKAGE_METADATA"]).deny_const == {"package_metadata"}

    def test_validate_normalizes_deny(self, tmp_path):
        cfg = ShadowConfig(src_path=tmp_path, out_path=tmp_path, deny_const=frozenset({"Tag"}), env=EnvSnapshot({}))
        assert cfg.validate().deny_const == {"tag"}

    def test_validate_resolves(self, tmp_path):
        env = EnvSnapshot({"SHADOW_SRC_DIR": str(tmp_path), "OUT_DIR": str(tmp_path)})
        resolved = ShadowConfig(env=env).validate()
        assert resolved.src_path == tmp_path
        assert resolved.artifact == tmp_path / "shadow.py"
        assert resolved.env is env

    def test_validate_missing_out_dir(self, tmp_path):
        cfg = ShadowConfig(src_path=tmp_path, out_path=tmp_path / "missing", env=EnvSnapshot({}))
        with pytest.raises(EnvError, match="Output directory not found"):
            cfg.validate()

    def test_validate_rejects_bad_deny(self, tmp_path):
        cfg = ShadowConfig(src_path=tmp_path, out_path=tmp_path, deny_const=frozenset({""}), env=EnvSnapshot({}))
        with pytest.raises(EnvError, match="deny_const"):
            cfg.validate()

    def test_validate_rejects_bad_pattern(self, tmp_path):
        cfg = ShadowConfig(src_path=tmp_path, out_path=tmp_path, build_pattern="lazy", env=EnvSnapshot({}))
        with pytest.raises(EnvError, match="build_pattern"):
            cfg.validate()

    def test_validate_rejects_uncallable_hook(self, tmp_path):
        cfg = ShadowConfig(src_path=tmp_path, out_path=tmp_path, hook="nope", env=EnvSnapshot({}))
        with pytest.raises(EnvError, match="hook"):
            cfg.validate()


class TestLoadConfig:
    def test_full_file(self, tmp_path):
        (tmp_path / "out").mkdir()
        path = tmp_path / "shadow.yaml"
        path.write_text(
            "src_path: .\n"
            "out_path: out\n"
            "deny_const: [dependency_tree, package_metadata]\n"
            "build_pattern: custom\n"
            "rerun_keys: [commit_hash]\n"
            "rerun_paths: [pyproject.toml]\n"
            "rerun_envs: [RELEASE]\n"
        )
        cfg = load_config(path)
        assert Path(cfg.src_path) == tmp_path / "."
        assert Path(cfg.out_path) == tmp_path / "out"
        assert cfg.deny_const == {"dependency_tree", "package_metadata"}
        assert cfg.build_pattern.name == CUSTOM
        assert cfg.build_pattern.keys == {"commit_hash"}
        assert cfg.build_pattern.paths == (str(tmp_path / "pyproject.toml"),)
        assert cfg.build_pattern.envs == ("RELEASE",)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "shadow.yaml"
        path.write_text("")
        assert load_config(path) == ShadowConfig()

    def test_realtime(self, tmp_path):
        path = tmp_path / "shadow.yaml"
        path.write_text("build_pattern: RealTime\n")
        assert load_config(path).build_pattern.name == REAL_TIME

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "shadow.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(EnvError, match="not a YAML mapping"):
            load_config(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "shadow.yaml"
        path.write_text("deny: [x]\n")
        with pytest.raises(EnvError, match="Unknown keys"):
            load_config(path)

    def test_unknown_pattern(self, tmp_path):
        path = tmp_path / "shadow.yaml"
        path.write_text("build_pattern: hourly\n")
        with pytest.raises(EnvError, match="Unknown build_pattern"):
            load_config(path)

    def test_deny_must_be_list(self, tmp_path):
        path = tmp_path / "shadow.yaml"
        path.write_text("deny_const: tag\n")
        with pytest.raises(EnvError, match="list of strings"):
            load_config(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "shadow.yaml"
        path.write_text("a: [unclosed\n")
        with pytest.raises(EnvError, match="Malformed YAML"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(EnvError, match="Cannot read"):
            load_config(tmp_path / "absent.yaml")

    def test_deny_by_emitted_name(self, tmp_path):
        path = tmp_path / "shadow.yaml"
        path.write_text("deny_const: [DEPENDENCY_TREE]\nbuild_pattern: custom\nrerun_keys: [COMMIT_HASH]\n")
        cfg = load_config(path)
        assert cfg.deny_const == {"dependency_tree"}
        assert cfg.build_pattern.keys == {"commit_hash"}
