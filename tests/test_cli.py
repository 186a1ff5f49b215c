"""Tests for the operator CLI."""

import pytest
import requests
import requests_mock
from loguru import logger

from risk_scanner.cli import main
from risk_scanner.render import ERROR_TITLE, SUCCESS_TITLE

from conftest import API_BASE, RISKY_TRANSFER


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()


def run(argv):
    return main(["--api-base", API_BASE] + argv)


def test_analyze_plain_output(capsys):
    with requests_mock.Mocker() as m:
        m.post(f"{API_BASE}/analysis", json=RISKY_TRANSFER)
        code = run(["--plain", "analyze", "0xabc", "0xdef"])

    out = capsys.readouterr().out
    assert code == 0
    assert m.last_request.json() == {"contract_address": "0xabc", "call_data": "0xdef"}
    assert out.startswith(SUCCESS_TITLE)
    assert "[1] 100" in out


def test_analyze_rich_output(capsys):
    with requests_mock.Mocker() as m:
        m.post(f"{API_BASE}/analysis", json=RISKY_TRANSFER)
        code = run(["analyze", "0xabc", "0xdef"])

    assert code == 0
    assert "transfer(...)" in capsys.readouterr().out


def test_connection_failure_exits_non_zero(capsys):
    with requests_mock.Mocker() as m:
        m.post(f"{API_BASE}/analysis", exc=requests.exceptions.ConnectTimeout("timed out"))
        code = run(["--plain", "analyze", "0xabc", "0xdef"])

    out = capsys.readouterr().out
    assert code == 1
    assert out.startswith(ERROR_TITLE)
    assert "Error de conexión" in out


def test_empty_argument_is_not_submitted(capsys):
    with requests_mock.Mocker() as m:
        code = run(["--plain", "analyze", "", "0xdef"])

    assert code == 2
    assert m.call_count == 0
    assert "required" in capsys.readouterr().err


def test_debug_prints_raw_result(capsys):
    with requests_mock.Mocker() as m:
        m.post(f"{API_BASE}/analysis", json=RISKY_TRANSFER)
        run(["--plain", "--debug", "analyze", "0xabc", "0xdef"])

    out = capsys.readouterr().out
    assert "--- DEBUG (raw result) ---" in out
    assert '"function_name": "transfer"' in out


def test_decode_with_abi(capsys):
    body = {
        "status": "success",
        "function_name": "approve",
        "arguments": ["0x2"],
        "abi": [{"name": "approve"}],
    }
    with requests_mock.Mocker() as m:
        m.post(f"{API_BASE}/decode", json=body)
        code = run(["--plain", "decode", "--abi", "0xabc", "0xdef"])

    out = capsys.readouterr().out
    assert code == 0
    assert "approve(...)" in out
    assert "// CONTRACT ABI" in out
    assert '"name": "approve"' in out


def test_bad_config_file(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("nope: 1\n")

    assert main(["--config", str(path), "analyze", "a", "b"]) == 2
    assert "unknown settings" in capsys.readouterr().err


def test_interactive_session(monkeypatch, capsys):
    answers = iter(["", "0xabc", "0xdef", "0xabc", "", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    with requests_mock.Mocker() as m:
        m.post(f"{API_BASE}/analysis", json=RISKY_TRANSFER)
        code = run(["--plain"])

    out = capsys.readouterr().out
    assert code == 0
    assert m.call_count == 1
    assert "(call data is required)" in out
    assert out.rstrip().endswith("Goodbye.")


def test_interactive_eof(monkeypatch, capsys):
    def eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)

    assert run(["--plain"]) == 0
    assert "Goodbye." in capsys.readouterr().out


@pytest.mark.parametrize(
    "content, error",
    [
        ("api_base: [unclosed\n", "invalid YAML"),
        ("api_base: 8080\n", "api_base must be a string"),
        ("log_level: 10\n", "log_level must be a string"),
    ],
)
def test_malformed_config_exits_cleanly(tmp_path, capsys, content, error):
    path = tmp_path / "bad.yaml"
    path.write_text(content)

    assert main(["--config", str(path), "analyze", "a", "b"]) == 2
    assert error in capsys.readouterr().err


def test_unknown_log_level_exits_cleanly(tmp_path, capsys):
    path = tmp_path / "loud.yaml"
    path.write_text("log_level: LOUD\n")

    assert main(["--config", str(path), "analyze", "a", "b"]) == 2
    assert "invalid log level" in capsys.readouterr().err


def test_interactive_interrupt_during_request(monkeypatch, capsys):
    answers = iter(["0xabc", "0xdef"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    with requests_mock.Mocker() as m:
        m.post(f"{API_BASE}/analysis", exc=KeyboardInterrupt)
        code = run([])

    out = capsys.readouterr().out
    assert code == 0
    assert "Interrupted." in out
    assert out.rstrip().endswith("Goodbye.")
