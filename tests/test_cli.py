"""CLI behaviour coverage for the click command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_audit_gelf import __init__conf__
from lib_audit_gelf import cli as cli_mod
from lib_audit_gelf.__main__ import main


@pytest.fixture
def user_event_file(tmp_path: Path) -> Path:
    path = tmp_path / "login.json"
    path.write_text(
        json.dumps(
            {
                "id": "e-1",
                "time": 1699999999500,
                "type": "LOGIN",
                "realmId": "r-1",
                "realmName": "demo",
                "ipAddress": "10.0.0.5",
                "details": {"username": "alice"},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def admin_event_file(tmp_path: Path) -> Path:
    path = tmp_path / "delete.json"
    path.write_text(
        json.dumps(
            {
                "id": "a-1",
                "operationType": "DELETE",
                "resourceType": "USER",
                "resourcePath": "users/123",
                "representation": '{"id":"123"}',
                "authDetails": {"realmId": "m-1", "userId": "admin"},
            }
        ),
        encoding="utf-8",
    )
    return path


def test_cli_without_subcommand_prints_summary() -> None:
    result = CliRunner().invoke(cli_mod.cli, [])
    assert result.exit_code == 0
    assert result.output == __init__conf__.summary_info()


def test_cli_info_command_matches_summary() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["info"])
    assert result.exit_code == 0
    assert "Info for lib_audit_gelf" in result.output


def test_cli_version_option() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["--version"])
    assert result.exit_code == 0
    assert __init__conf__.version in result.output


def test_render_user_event_raw(user_event_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GELF_SOURCE_HOSTNAME", raising=False)
    result = CliRunner().invoke(cli_mod.cli, ["render", "--raw", str(user_event_file)])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["short_message"] == "LOGIN 10.0.0.5 demo alice"
    assert payload["host"] == "keycloak"
    assert payload["timestamp"] == 1699999999


def test_render_admin_event_can_drop_representation(admin_event_file: Path) -> None:
    result = CliRunner().invoke(
        cli_mod.cli,
        ["render", "--raw", "--no-representation", "--hostname", "sso", str(admin_event_file)],
    )

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["admin_event"] == "true"
    assert payload["short_message"] == "DELETE admin"
    assert payload["host"] == "sso"
    assert "representation" not in payload


def test_render_reads_stdin() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["render", "--raw", "-"], input='{"type": "LOGOUT", "time": 0}')
    assert result.exit_code == 0
    assert json.loads(result.output)["short_message"] == "LOGOUT"


def test_render_ignores_malformed_port_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GELF_PORT", "not-a-port")
    monkeypatch.setenv("GELF_SOURCE_HOSTNAME", "kc-env")
    result = CliRunner().invoke(cli_mod.cli, ["render", "--raw", "-"], input='{"type": "LOGOUT", "time": 0}')
    assert result.exit_code == 0
    assert json.loads(result.output)["host"] == "kc-env"


def test_render_rejects_invalid_json() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["render", "-"], input="not json")
    assert result.exit_code == 1
    assert "not valid JSON" in result.output


def test_render_rejects_unknown_shape() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["render", "-"], input='{"time": 0}')
    assert result.exit_code == 1
    assert "does not describe an event" in result.output


def test_send_delivers_datagram(user_event_file: Path, udp_receiver) -> None:
    result = CliRunner().invoke(
        cli_mod.cli,
        ["send", "--gelf-host", udp_receiver.host, "--gelf-port", str(udp_receiver.port), str(user_event_file)],
    )

    assert result.exit_code == 0, result.output
    assert f"sent to {udp_receiver.host}:{udp_receiver.port}" in result.output
    payload = json.loads(udp_receiver.receive().decode("utf-8"))
    assert payload["event_id"] == "e-1"
    assert payload["username"] == "alice"


def test_send_rejects_bad_port(user_event_file: Path) -> None:
    result = CliRunner().invoke(cli_mod.cli, ["send", "--gelf-port", "nope", str(user_event_file)])
    assert result.exit_code == 2
    assert "must be an integer" in result.output


def test_main_returns_zero_for_info(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["info"]) == 0
    assert "Info for lib_audit_gelf" in capsys.readouterr().out


def test_main_returns_click_exit_code(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["render", "/does/not/exist.json"]) == 2
