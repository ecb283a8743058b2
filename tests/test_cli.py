"""Tests for the super-message command line."""

import json

import pytest
from click.testing import CliRunner

from super_message.cli import main as cli_main
from super_message.cli.main import main


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_main, "CONFIG_FILE", tmp_path / "config.json")
    monkeypatch.delenv("SM_ACCESS_TOKEN", raising=False)
    return CliRunner()


def test_decode_json(runner):
    result = runner.invoke(main, ["decode", "rt=tok1&rte=9999999999&cid=chan1&id=4", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "request_token": "tok1",
        "token_expired_at": 9999999999,
        "channel_id": "chan1",
        "message_id": 4,
        "message_local_id": 0,
        "template_id": "",
        "template_version": 0,
    }


def test_decode_table(runner):
    result = runner.invoke(main, ["decode", "https://todo.example.com/todos?rt=tok1&rte=1&cid=chan1"])
    assert result.exit_code == 0
    assert "chan1" in result.output


def test_decode_rejects_missing_token(runner):
    result = runner.invoke(main, ["decode", "rte=1&cid=chan1"])
    assert result.exit_code == 1


def test_decode_message_request_check(runner):
    result = runner.invoke(main, ["decode", "rt=tok1&rte=1&cid=chan1", "--message-request"])
    assert result.exit_code == 1


def test_auth_round_trip(runner, tmp_path):
    result = runner.invoke(main, ["auth", "set-token", "--base-url", "https://api.test"], input="secret\n")
    assert result.exit_code == 0
    saved = json.loads((tmp_path / "config.json").read_text())
    assert saved == {"access_token": "secret", "base_url": "https://api.test"}

    assert "configured" in runner.invoke(main, ["auth", "status"]).output
    runner.invoke(main, ["auth", "logout"])
    assert "No access token" in runner.invoke(main, ["auth", "status"]).output


def test_verify_without_token_exits(runner):
    result = runner.invoke(main, ["verify", "tok1"])
    assert result.exit_code == 1


def test_messages_create_rejects_bad_json(runner):
    result = runner.invoke(main, [
        "messages", "create", "--access-token", "at", "-t", "tpl", "-v", "1", "--title", "Hi", "--data", "[1]",
    ])
    assert result.exit_code == 2
