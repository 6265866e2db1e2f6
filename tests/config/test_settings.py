"""Tests for configuration loading."""

import pytest
from langcat.config import load_settings, load_config
from langcat.config.settings import Settings, build_settings
from langcat.policy.models import Mode
from langcat.utils.errors import ConfigError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the real user/project config out of the way."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LANGCAT_CONFIG", raising=False)
    return tmp_path


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadSettings:

    def test_packaged_defaults(self):
        settings = load_settings()

        assert settings.namespace == "lcatpolicy"
        assert settings.key_prefix == "lcat:"
        assert settings.storage.backend == "memory"
        assert settings.cache.max_entries == 10000
        assert settings.cache.ttl_seconds is None
        assert settings.default_policy().mode == Mode.ALL

    def test_explicit_file_overrides(self, isolated_env):
        path = _write(isolated_env / "custom.yaml", """
translation_policy:
  storage:
    key_prefix: "cat:"
  default:
    mode: except
    categories: [Ads, Spoilers]
""")
        settings = load_settings(str(path))
        default = settings.default_policy()

        assert settings.key_prefix == "cat:"
        assert settings.namespace == "lcatpolicy"
        assert default.mode == Mode.EXCEPT
        assert default.cats == frozenset({"ads", "spoilers"})

    def test_layers_merge_in_order(self, isolated_env, monkeypatch):
        _write(isolated_env / "home" / ".langcat" / "config.yaml", "db: user\ncache:\n  max_entries: 5\n")
        _write(isolated_env / ".langcat" / "config.yaml", "db: project\n")
        env_file = _write(isolated_env / "env.yaml", "secret: s3cret\n")
        monkeypatch.setenv("LANGCAT_CONFIG", str(env_file))

        config = load_config()

        assert config["db"] == "project"
        assert config["cache"]["max_entries"] == 5
        assert config["secret"] == "s3cret"

    def test_missing_explicit_file(self, isolated_env):
        with pytest.raises(ConfigError):
            load_settings(str(isolated_env / "nope.yaml"))

    def test_invalid_yaml(self, isolated_env):
        path = _write(isolated_env / "bad.yaml", "storage: [unclosed\n")

        with pytest.raises(ConfigError):
            load_settings(str(path))

    def test_invalid_value_shape(self):
        with pytest.raises(ConfigError):
            build_settings({"cache": {"max_entries": 0}})


class TestDefaultPolicy:

    def test_invalid_mode_falls_back_to_all(self, caplog):
        settings = Settings(translation_policy={"default": {"mode": "sometimes", "categories": ["x"]}})

        default = settings.default_policy()

        assert default.mode == Mode.ALL
        assert default.cats == frozenset()
        assert "Invalid default policy mode" in caplog.text

    def test_empty_only_normalized_to_none(self):
        settings = Settings(translation_policy={"default": {"mode": "ONLY", "categories": None}})

        assert settings.default_policy().mode == Mode.NONE
