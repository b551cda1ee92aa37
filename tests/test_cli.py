import json

import pytest
from click.testing import CliRunner

from fieldlog import __version__
from fieldlog.cli import cli
from fieldlog.config import ENV_MAPPINGS


def make_env(**overrides):
    """Environment for an invocation; variables not given are removed"""
    env = {name: None for name in ENV_MAPPINGS}
    env["SENTRY_DSN"] = None
    env.update(overrides)
    return env


@pytest.fixture(scope="class")
def cli_runner():
    yield CliRunner()


@pytest.fixture
def sentry(mocker):
    return mocker.patch("fieldlog.reporting.sentry_sdk")


class TestCli:
    def test_help(self, cli_runner):
        result = cli_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0, f"Exit code 0 expected. Got: {result.exit_code} instead."
        assert "Usage:" in result.output
        assert "emit" in result.output
        assert "config" in result.output

    def test_version(self, cli_runner):
        result = cli_runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestEmit:
    def test_emit_record_with_fields(self, cli_runner):
        result = cli_runner.invoke(
            cli,
            ["emit", "Job finished", "--level", "info", "-f", "job=nightly", "-f", "status=ok"],
            env=make_env(LOG_LEVEL="info"),
        )

        assert result.exit_code == 0, result.output
        entry = json.loads(result.output.strip())
        assert entry["level"] == "info"
        assert entry["message"] == "Job finished"
        assert entry["job"] == "nightly"
        assert entry["status"] == "ok"
        assert "timestamp" in entry

    def test_below_configured_level_prints_nothing(self, cli_runner):
        result = cli_runner.invoke(cli, ["emit", "quiet", "--level", "debug"], env=make_env(LOG_LEVEL="info"))

        assert result.exit_code == 0
        assert result.output == ""

    def test_default_level_hides_info(self, cli_runner):
        result = cli_runner.invoke(cli, ["emit", "hidden"], env=make_env())

        assert result.exit_code == 0
        assert result.output == ""

    @pytest.mark.parametrize(
        "environment, expected",
        [("development", "hunter2"), ("production", ""), (None, "")],
        ids=["development", "production", "unset"],
    )
    def test_sensitive_field_redaction(self, cli_runner, environment, expected):
        result = cli_runner.invoke(
            cli,
            ["emit", "Login", "-l", "error", "-s", "password=hunter2"],
            env=make_env(ENVIRONMENT=environment),
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["password"] == expected

    def test_global_and_context_fields(self, cli_runner):
        result = cli_runner.invoke(
            cli,
            ["emit", "m", "-l", "error", "-g", "service=api", "-g", "region=eu", "-f", "region=us"],
            env=make_env(),
        )

        entry = json.loads(result.output)
        assert entry["service"] == "api"
        assert entry["region"] == "us"

    def test_json_values(self, cli_runner):
        result = cli_runner.invoke(
            cli,
            ["emit", "m", "-l", "error", "--json-values", "-f", 'payload={"a": 1}', "-f", "count=42", "-f", "name=plain"],
            env=make_env(),
        )

        entry = json.loads(result.output)
        assert entry["payload"] == '{"a":1}'
        assert entry["count"] == 42
        assert entry["name"] == "plain"

    def test_simple_format(self, cli_runner):
        result = cli_runner.invoke(cli, ["emit", "Started", "-l", "error"], env=make_env(LOG_FORMAT="simple"))

        assert result.output.startswith("error: Started ")

    def test_log_file(self, cli_runner, tmp_path):
        log_file = tmp_path / "logs" / "app.log"

        result = cli_runner.invoke(
            cli,
            ["emit", "to file", "-l", "debug"],
            env=make_env(LOG_LEVEL="error", LOG_FILE=str(log_file), LOG_FILE_LEVEL="debug"),
        )

        assert result.exit_code == 0
        assert result.output == ""
        assert json.loads(log_file.read_text())["message"] == "to file"

    def test_malformed_field(self, cli_runner):
        result = cli_runner.invoke(cli, ["emit", "m", "-f", "no-equals-sign"], env=make_env())

        assert result.exit_code == 2
        assert "Expected NAME=VALUE" in result.output

    def test_invalid_log_level(self, cli_runner):
        result = cli_runner.invoke(cli, ["emit", "m"], env=make_env(LOG_LEVEL="warning"))

        assert result.exit_code == 1
        assert "Invalid log level" in result.output

    def test_error_option_reports_and_adds_field(self, cli_runner, sentry):
        result = cli_runner.invoke(cli, ["emit", "Backup failed", "-l", "error", "--error", "disk full"], env=make_env())

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["error"] == "disk full"
        sentry.capture_message.assert_called_once_with("disk full", level="error")
        sentry.init.assert_not_called()

    def test_dsn_enables_reporting(self, cli_runner, sentry):
        result = cli_runner.invoke(
            cli,
            ["emit", "m", "-l", "error"],
            env=make_env(ENVIRONMENT="staging", SENTRY_DSN="https://key@sentry.example/1"),
        )

        assert result.exit_code == 0, result.output
        sentry.init.assert_called_once_with(dsn="https://key@sentry.example/1", environment="staging")
        sentry.get_global_scope.return_value.set_tag.assert_called_once_with("environment", "staging")


class TestConfigCommand:
    def test_defaults(self, cli_runner):
        result = cli_runner.invoke(cli, ["config"], env=make_env())

        assert result.exit_code == 0
        config = json.loads(result.output)
        assert config["log_level"] == "error"
        assert config["log_format"] == "json"
        assert config["development_mode"] is False

    def test_unknown_format_reported_as_json(self, cli_runner):
        result = cli_runner.invoke(cli, ["config"], env=make_env(LOG_FORMAT="xml", ENVIRONMENT="development"))

        config = json.loads(result.output)
        assert config["log_format"] == "json"
        assert config["development_mode"] is True

    def test_invalid_level(self, cli_runner):
        result = cli_runner.invoke(cli, ["config"], env=make_env(LOG_FILE_LEVEL="loud"))

        assert result.exit_code == 1
        assert "Invalid log level" in result.output
