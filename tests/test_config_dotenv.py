from __future__ import annotations

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_audit_gelf import cli as cli_module
from lib_audit_gelf import config as gelf_config


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> None:
    """Reset shared dotenv state around each test."""

    gelf_config._reset_dotenv_state_for_testing()
    yield
    gelf_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values found in parent directories."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("GELF_HOST=graylog.dotenv\n")
    monkeypatch.chdir(nested)
    monkeypatch.delenv("GELF_HOST", raising=False)

    loaded = gelf_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert os.environ["GELF_HOST"] == "graylog.dotenv"

    os.environ.pop("GELF_HOST", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    (tmp_path / ".env").write_text("GELF_HOST=graylog.dotenv\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GELF_HOST", "graylog.real")

    assert gelf_config.enable_dotenv() is not None
    assert os.environ["GELF_HOST"] == "graylog.real"


def test_enable_dotenv_loads_only_once(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("GELF_PORT=1234\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GELF_PORT", raising=False)

    first = gelf_config.enable_dotenv()
    env_file.write_text("GELF_PORT=9999\n")
    second = gelf_config.enable_dotenv()

    assert first == second == env_file.resolve()
    assert os.environ["GELF_PORT"] == "1234"

    os.environ.pop("GELF_PORT", None)


def test_dotenv_requested_flag_beats_environment() -> None:
    env = {gelf_config.DOTENV_ENV_VAR: "1"}
    assert gelf_config.dotenv_requested(None, env) is True
    assert gelf_config.dotenv_requested(False, env) is False
    assert gelf_config.dotenv_requested(None, {}) is False
    assert gelf_config.dotenv_requested(True, {}) is True


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()
    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(gelf_config, "enable_dotenv", record_enable)
    monkeypatch.delenv(gelf_config.DOTENV_ENV_VAR, raising=False)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["info"], env={gelf_config.DOTENV_ENV_VAR: "1"})
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env={gelf_config.DOTENV_ENV_VAR: "1"})
    assert result.exit_code == 0
    assert calls == []
