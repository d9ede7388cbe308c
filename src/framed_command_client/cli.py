"""CLI adapter for ``framed_command_client`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose :func:`framed_command_client.core.send_command` as a single command so
operators can send one framed command to a server and see its reply.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :class:`FramedClientCommand` – Click command reporting unknown flags as
  ``Unknown option '-x'.``.
* :func:`cli` – validates the three positional arguments, runs the exchange,
  and writes the raw reply to stdout.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI is the only layer that turns errors into exit codes. Usage problems
become :class:`click.UsageError` (usage text, exit 2); every other failure
propagates to ``lib_cli_exit_tools`` which prints the diagnostic to stderr and
picks the exit status.
"""

from __future__ import annotations

import logging
import sys
from importlib import metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import ClientSettings, send_command
from .domain.errors import UsageError
from .domain.message import REPLY_CAPACITY, Command, parse_port
from .observability import enable_console_logging

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

PROG_NAME: Final[str] = "framed-command-client"
ADDRESS_REQUIRED_MESSAGE: Final[str] = "The ip address is required."
TOO_FEW_MESSAGE: Final[str] = "Too few arguments."
TOO_MANY_MESSAGE: Final[str] = "Too many arguments."
MAX_BUFFER_SIZE: Final[int] = 65536


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("framed_command_client")
    except metadata.PackageNotFoundError:
        return "0.0.0"


class FramedClientCommand(click.RichCommand):
    """Click command that words unknown flags the way the usage text expects."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.NoSuchOption as exc:
            raise click.UsageError(f"Unknown option '{exc.option_name}'.", ctx=ctx) from exc


@click.command(
    cls=FramedClientCommand,
    help="Send one length-prefixed command over TCP and print the reply.",
    context_settings=CLICK_CONTEXT_SETTINGS,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="framed_command_client",
    message="framed_command_client version %(version)s",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for connect, send and receive (default: block indefinitely)",
)
@click.option(
    "--buffer-size",
    type=click.IntRange(1, MAX_BUFFER_SIZE),
    default=REPLY_CAPACITY,
    show_default=True,
    help="Capacity of the single receive",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Log resolve/connect/send/receive events to stderr",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.argument("arguments", nargs=-1, metavar="<ip-address> <port> <command>")
@click.pass_context
def cli(
    ctx: click.Context,
    arguments: Sequence[str],
    timeout: Optional[float],
    buffer_size: int,
    verbose: bool,
    traceback: bool,
) -> None:
    """Resolve, connect, send the framed command, and print the one-shot reply.

    Why
        The exchange itself lives in :func:`send_command`; this callback only
        validates argv, wires options into :class:`ClientSettings`, and keeps
        stdout reserved for reply bytes.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and, with
        ``--verbose``, attaches a stderr handler to the package logger.
    """

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if verbose:
        enable_console_logging(logging.DEBUG)

    host, port, command = _validate_arguments(ctx, arguments)
    reply = send_command(
        host,
        port,
        command,
        settings=ClientSettings(timeout=timeout, buffer_size=buffer_size),
    )
    if reply:
        click.echo(reply.data, nl=False)


def _validate_arguments(ctx: click.Context, arguments: Sequence[str]) -> tuple[str, int, Command]:
    """Return ``(host, port, command)`` or raise :class:`click.UsageError`.

    Only syntax is checked here; whether *host* is an address literal is a
    data question answered by the resolver.
    """

    if len(arguments) < 3:
        raise click.UsageError(TOO_FEW_MESSAGE, ctx=ctx)
    if len(arguments) > 3:
        raise click.UsageError(TOO_MANY_MESSAGE, ctx=ctx)
    host, port_text, command_text = arguments
    try:
        if not host:
            raise UsageError(ADDRESS_REQUIRED_MESSAGE)
        return host, parse_port(port_text), Command.from_text(command_text)
    except UsageError as exc:
        raise click.UsageError(str(exc), ctx=ctx) from exc


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=PROG_NAME,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
