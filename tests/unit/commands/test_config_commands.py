"""Tests for the config command group."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from atlassian_cli import __version__, main
from atlassian_cli.exceptions import AuthenticationError


@pytest.fixture
def project_config(isolated_home):
    path = Path.cwd() / ".atlassian.toml"
    path.write_text(
        '[default]\ndomain = "file.atlassian.net"\nemail = "file@example.com"\n\n'
        '[default.jira]\nprojects_filter = ["PROJ"]\n\n'
        '[work]\ndomain = "work.atlassian.net"\n',
        encoding="utf-8",
    )
    path.chmod(0o600)
    return path


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_init(runner, clean_env, isolated_home):
    result = runner.invoke(main, ["config", "init"])

    assert result.exit_code == 0, result.output
    assert (Path.cwd() / ".atlassian.toml").is_file()
    assert "Created" in result.stderr


def test_init_refuses_existing(runner, clean_env, project_config):
    result = runner.invoke(main, ["config", "init"])
    assert result.exit_code == 1
    assert "already exists" in result.stderr


def test_init_global(runner, clean_env, isolated_home):
    result = runner.invoke(main, ["config", "init", "--global"])
    assert result.exit_code == 0, result.output
    assert (isolated_home / ".config" / "atlassian-cli" / "config.toml").is_file()


def test_show_masks_token(runner, clean_env, project_config):
    result = runner.invoke(
        main, ["config", "show"], env={"ATLASSIAN_API_TOKEN": "abcdefghijklmnop"}
    )

    assert result.exit_code == 0, result.output
    shown = json.loads(result.stdout)
    assert shown["domain"] == "file.atlassian.net"
    assert shown["token"] == "abcd********mnop"
    assert shown["jira"]["projects_filter"] == ["PROJ"]
    assert "abcdefghijklmnop" not in result.output


def test_show_without_credentials(runner, clean_env, isolated_home):
    result = runner.invoke(main, ["config", "show"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["token"] == "Not Provided"


def test_show_profile(runner, clean_env, project_config):
    result = runner.invoke(main, ["--profile", "work", "config", "show"])
    assert result.exit_code == 0, result.output
    shown = json.loads(result.stdout)
    assert shown["profile"] == "work"
    assert shown["domain"] == "work.atlassian.net"


def test_unknown_profile(runner, clean_env, project_config):
    result = runner.invoke(main, ["--profile", "nope", "config", "show"])
    assert result.exit_code == 1
    assert "Profile 'nope' not found" in result.stderr


def test_list(runner, clean_env, project_config):
    result = runner.invoke(main, ["config", "list"])

    assert result.exit_code == 0, result.output
    listed = json.loads(result.stdout)
    assert listed["project"]["profiles"] == ["default", "work"]
    assert listed["project"]["exists"] is True
    assert listed["global"]["exists"] is False


def test_path(runner, clean_env, isolated_home):
    project = runner.invoke(main, ["config", "path"])
    global_ = runner.invoke(main, ["config", "path", "--global"])

    assert project.stdout.strip() == str(Path.cwd() / ".atlassian.toml")
    assert global_.stdout.strip() == str(isolated_home / ".config/atlassian-cli/config.toml")


def test_explicit_config_path(runner, clean_env, isolated_home, tmp_path):
    custom = tmp_path / "custom.toml"
    custom.write_text('[default]\ndomain = "custom.atlassian.net"\n', encoding="utf-8")
    custom.chmod(0o600)

    shown = runner.invoke(main, ["--config", str(custom), "config", "show"])
    path = runner.invoke(main, ["--config", str(custom), "config", "path"])

    assert json.loads(shown.stdout)["domain"] == "custom.atlassian.net"
    assert path.stdout.strip() == str(custom)


def test_missing_explicit_config(runner, clean_env, isolated_home, tmp_path):
    result = runner.invoke(main, ["--config", str(tmp_path / "nope.toml"), "config", "show"])
    assert result.exit_code == 1
    assert "Config file not found" in result.stderr


def test_edit(runner, clean_env, project_config):
    with patch("atlassian_cli.commands.config.click.edit") as mock_edit:
        result = runner.invoke(main, ["config", "edit"])
    assert result.exit_code == 0, result.output
    mock_edit.assert_called_once_with(filename=str(project_config))


def test_edit_missing_file(runner, clean_env, isolated_home):
    with patch("atlassian_cli.commands.config.click.edit") as mock_edit:
        result = runner.invoke(main, ["config", "edit"])
    assert result.exit_code == 1
    assert "config init" in result.stderr
    mock_edit.assert_not_called()


class TestValidate:
    @pytest.fixture
    def fetcher(self):
        with patch("atlassian_cli.commands.config.JiraFetcher") as fetcher_class:
            yield fetcher_class.return_value

    def test_valid(self, runner, cli_env, fetcher):
        fetcher.get_myself.return_value = {"displayName": "Alice", "accountId": "a1"}

        result = runner.invoke(main, ["config", "validate"], env=cli_env)

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            "valid": True,
            "profile": "default",
            "domain": "test.atlassian.net",
            "user": "Alice",
            "account_id": "a1",
        }

    def test_rejected_credentials(self, runner, cli_env, fetcher):
        fetcher.get_myself.side_effect = AuthenticationError(
            "get", "https://test.atlassian.net/rest/api/3/myself", status=401, message="denied"
        )
        result = runner.invoke(main, ["config", "validate"], env=cli_env)
        assert result.exit_code == 1
        assert "denied" in result.stderr

    def test_missing_credentials(self, runner, clean_env, isolated_home, fetcher):
        result = runner.invoke(main, ["config", "validate"])
        assert result.exit_code == 1
        assert "not configured" in result.stderr
        fetcher.get_myself.assert_not_called()


def test_env_file(runner, clean_env, isolated_home, tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("ATLASSIAN_DOMAIN=dotenv.atlassian.net\n", encoding="utf-8")

    result = runner.invoke(main, ["--env-file", str(env_file), "config", "show"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["domain"] == "dotenv.atlassian.net"
