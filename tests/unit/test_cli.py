"""Tests for the governance-processor command line."""

import pytest
from typer.testing import CliRunner

from governance_processor import cli
from governance_processor.cli import app
from governance_processor.config import ENVIRONMENT_VARIABLES

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name, _, _ in ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.setattr(cli, "configure_structlog", lambda environment: None)


class TestVersion:
    @pytest.mark.parametrize("flag", ["--version", "-v"])
    def test_version_flag(self, flag: str, project_version: str) -> None:
        result = runner.invoke(app, [flag])

        assert result.exit_code == 0
        assert f"governance-processor version {project_version}" in result.stdout


class TestUsage:
    def test_usage_lists_environment_variables(self) -> None:
        result = runner.invoke(app, ["usage"])

        assert result.exit_code == 0
        assert "Environment variables:" in result.stdout
        assert "PROCESSOR_CRON_CONFIG" in result.stdout
        assert "DATABASE_URL" in result.stdout


class TestPoll:
    def test_single_cycle_against_empty_source(self) -> None:
        result = runner.invoke(app, ["poll", "--once"])

        assert result.exit_code == 0
        assert "fetched=0 handled=0" in result.stdout
        assert "watermark_advanced=False" in result.stdout

    def test_invalid_configuration_exits_with_usage(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PROCESSOR_PERSISTER_TYPE", "mongodb")

        result = runner.invoke(app, ["poll", "--once"])

        assert result.exit_code == 2
        assert "Invalid configuration" in result.stdout
        assert "Environment variables:" in result.stdout

    def test_postgresql_without_url_is_rejected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PROCESSOR_PERSISTER_TYPE", "postgresql")

        result = runner.invoke(app, ["subscribe"])

        assert result.exit_code == 2
        assert "DATABASE_URL" in result.stdout

    def test_postgresql_without_durable_stores_is_rejected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PROCESSOR_PERSISTER_TYPE", "postgresql")
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:pw@localhost/civil")

        result = runner.invoke(app, ["poll", "--once"])

        assert result.exit_code == 2
        assert "Invalid configuration: the postgresql persister" in result.stdout
