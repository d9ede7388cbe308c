"""End-to-end CLI coverage for ``framed-command-client``.

These tests exercise the documented invocation ``<ip-address> <port>
<command>`` and its usage diagnostics through Click's runner, plus the
``main`` entry point that funnels errors through ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

import lib_cli_exit_tools

from framed_command_client import InvalidAddress, cli
from framed_command_client.domain.errors import ConnectFailed
from framed_command_client.observability import disable_console_logging
from tests.support import LoopbackPeer, unused_port


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_prints_reply_bytes_only() -> None:
    """A successful exchange writes the raw reply to stdout and exits 0."""

    with LoopbackPeer(reply=b"PONG") as peer:
        result = _runner().invoke(cli.cli, ["127.0.0.1", str(peer.port), "PING"])
    assert result.exit_code == 0, result.output
    assert result.stdout_bytes == b"PONG"
    assert peer.frames == [b"\x04PING"]


def test_cli_empty_reply_prints_nothing() -> None:
    with LoopbackPeer(reply=b"") as peer:
        result = _runner().invoke(cli.cli, ["127.0.0.1", str(peer.port), "PING"])
    assert result.exit_code == 0
    assert result.stdout_bytes == b""


def test_cli_options_reach_the_exchange() -> None:
    with LoopbackPeer(reply=b"abcdefgh") as peer:
        result = _runner().invoke(
            cli.cli,
            ["--timeout", "2", "--buffer-size", "3", "127.0.0.1", str(peer.port), "DATA"],
        )
    assert result.exit_code == 0
    assert result.stdout_bytes == b"abc"


def test_cli_verbose_logs_to_stderr_only() -> None:
    try:
        with LoopbackPeer(reply=b"PONG") as peer:
            result = _runner().invoke(cli.cli, ["--verbose", "127.0.0.1", str(peer.port), "PING"])
        assert result.exit_code == 0
        assert result.stdout_bytes == b"PONG"
        assert "connected" in result.output
    finally:
        disable_console_logging()


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_cli_help_exits_zero(flag: str) -> None:
    result = _runner().invoke(cli.cli, [flag])
    assert result.exit_code == 0
    assert "Usage" in result.output
    assert "<ip-address> <port> <command>" in result.output


def test_cli_unknown_option() -> None:
    result = _runner().invoke(cli.cli, ["-x", "127.0.0.1", "9000", "PING"])
    assert result.exit_code == 2
    assert "Unknown option '-x'." in result.output
    assert "Usage" in result.output


@pytest.mark.parametrize(
    ("argv", "message"),
    [
        ([], "Too few arguments."),
        (["127.0.0.1", "9000"], "Too few arguments."),
        (["127.0.0.1", "9000", "PING", "EXTRA"], "Too many arguments."),
        (["127.0.0.1", "90a0", "PING"], "Invalid characters in input."),
        (["127.0.0.1", "70000", "PING"], "in_port_t value out of range."),
        (["", "9000", "PING"], "The ip address is required."),
        (["127.0.0.1", "", "PING"], "The port is required."),
    ],
)
def test_cli_usage_errors(argv: list[str], message: str) -> None:
    result = _runner().invoke(cli.cli, argv)
    assert result.exit_code == 2
    assert message in result.output


def test_cli_rejects_oversized_command_as_usage_error() -> None:
    result = _runner().invoke(cli.cli, ["127.0.0.1", "9000", "x" * 256])
    assert result.exit_code == 2
    assert "255" in result.output


def test_cli_invalid_address_is_not_a_usage_error() -> None:
    result = _runner().invoke(cli.cli, ["not-an-ip", "9000", "PING"])
    assert result.exit_code != 0
    assert isinstance(result.exception, InvalidAddress)
    assert "Usage" not in result.output


def test_cli_connect_failure_propagates() -> None:
    result = _runner().invoke(cli.cli, ["127.0.0.1", str(unused_port()), "PING"])
    assert result.exit_code != 0
    assert isinstance(result.exception, ConnectFailed)


def test_cli_version() -> None:
    result = _runner().invoke(cli.cli, ["--version"])
    assert result.exit_code == 0
    assert "framed_command_client version" in result.output


def test_main_returns_zero_on_success(capfd: pytest.CaptureFixture[str]) -> None:
    with LoopbackPeer(reply=b"PONG") as peer:
        exit_code = cli.main(["127.0.0.1", str(peer.port), "PING"])
    assert exit_code == 0


def test_main_reports_invalid_address(capfd: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["not-an-ip", "9000", "PING"])
    assert exit_code != 0
    assert "not-an-ip" in capfd.readouterr().err


def test_main_returns_nonzero_on_usage_error(capfd: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["127.0.0.1", "70000", "PING"]) != 0


def test_main_restores_traceback_flag(capfd: pytest.CaptureFixture[str]) -> None:
    """`cli main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    with LoopbackPeer(reply=b"PONG") as peer:
        exit_code = cli.main(["--traceback", "127.0.0.1", str(peer.port), "PING"], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback
