"""Tests for the langcat CLI."""

import json
import pytest
from click.testing import CliRunner
from langcat.cli.main import cli


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LANGCAT_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def deny_config(tmp_path):
    path = tmp_path / "deny.yaml"
    path.write_text("translation_policy:\n  default:\n    mode: NONE\n", encoding="utf-8")
    return str(path)


class TestPolicyCommands:

    def test_enable_only(self):
        result = CliRunner().invoke(cli, ['enable', '42', 'only', 'News'])

        assert result.exit_code == 0
        assert "Enabled only: news (mode=ONLY)." in result.output

    def test_enable_all(self):
        result = CliRunner().invoke(cli, ['enable', '42', 'all'])

        assert result.exit_code == 0
        assert "mode=ALL" in result.output

    def test_enable_single_on_deny_default(self, deny_config):
        result = CliRunner().invoke(cli, ['--config', deny_config, 'enable', '42', 'news'])

        assert result.exit_code == 0
        assert "Enabled category: news (mode=ONLY)." in result.output

    def test_disable_single(self):
        result = CliRunner().invoke(cli, ['disable', '42', 'sports'])

        assert result.exit_code == 0
        assert "Disabled category: sports (mode=EXCEPT)." in result.output

    def test_disable_only_requires_category(self):
        result = CliRunner().invoke(cli, ['disable', '42', 'only'])

        assert result.exit_code == 2
        assert "Missing category" in result.output

    def test_toggle(self):
        result = CliRunner().invoke(cli, ['toggle', '42', 'news'])

        assert result.exit_code == 0
        assert "mode=EXCEPT, set=[news]" in result.output


class TestShowCommands:

    def test_show_json(self):
        result = CliRunner().invoke(cli, ['show', '42', '--json'])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == {"identity": "42", "mode": "ALL", "cats": []}

    def test_decide_allow(self):
        result = CliRunner().invoke(cli, ['decide', '42', 'news'])

        assert result.exit_code == 0
        assert result.output.strip() == "allow"

    def test_decide_deny(self, deny_config):
        result = CliRunner().invoke(cli, ['--config', deny_config, 'decide', '42', 'news'])

        assert result.exit_code == 3
        assert result.output.strip() == "deny"

    def test_version(self):
        result = CliRunner().invoke(cli, ['version'])

        assert result.exit_code == 0
        assert "langcat version" in result.output


class TestMemoryBackendWarning:

    def test_mutation_warns_change_is_not_kept(self):
        result = CliRunner().invoke(cli, ['enable', '42', 'only', 'news'])

        assert result.exit_code == 0
        assert "storage backend is 'memory'" in result.output
        assert "Enabled only: news (mode=ONLY)." in result.output

    def test_read_only_commands_do_not_warn(self):
        result = CliRunner().invoke(cli, ['decide', '42', 'news'])

        assert result.exit_code == 0
        assert "storage backend" not in result.output
