"""Main CLI application for clipwatch."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path

import typer

from clipwatch.cli.atyper import ATyper
from clipwatch.config.settings import Config
from clipwatch.config.settings import load_config
from clipwatch.errors.types import ApiError
from clipwatch.errors.types import ApiErrorKind
from clipwatch.errors.types import AuthError
from clipwatch.errors.types import AuthErrorReason
from clipwatch.errors.types import ClipError
from clipwatch.errors.types import ClipErrorKind
from clipwatch.errors.types import ConfigurationError
from clipwatch.logging_config import setup_logging

# Create the main app
app = ATyper(
    name="clipwatch",
    help="Watch a Twitch channel and clip its big moments",
    add_completion=False,
    invoke_without_command=True,
)


class ExitCode(IntEnum):
    """Exit codes for clipwatch."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 2
    NETWORK_ERROR = 3
    CONFIG_ERROR = 4
    NOT_LIVE = 5


def exit_code_for(error: Exception) -> ExitCode:
    """Map an error onto the exit code a script can act on."""
    if isinstance(error, ConfigurationError):
        return ExitCode.CONFIG_ERROR
    if isinstance(error, AuthError):
        if error.reason is AuthErrorReason.NETWORK:
            return ExitCode.NETWORK_ERROR
        return ExitCode.AUTH_ERROR
    if isinstance(error, ClipError):
        if error.kind is ClipErrorKind.NOT_LIVE:
            return ExitCode.NOT_LIVE
        if error.cause is not None:
            return exit_code_for(error.cause)
        return ExitCode.GENERAL_ERROR
    if isinstance(error, ApiError):
        if error.kind is ApiErrorKind.NETWORK:
            return ExitCode.NETWORK_ERROR
        if error.kind is ApiErrorKind.FORBIDDEN or error.status == 401:
            return ExitCode.AUTH_ERROR
    return ExitCode.GENERAL_ERROR


def load_cli_config(ctx: typer.Context) -> Config:
    """Load configuration from the --config path or the default location."""
    return load_config(ctx.meta.get("config_path"))


@app.callback()
def main(
    ctx: typer.Context,
    json: bool = typer.Option(False, "--json", "-j", help="Enable JSON output mode"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Enable quiet mode"),
    config_path: Path | None = typer.Option(
        None, "--config", help="Path to an alternative config.toml"
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Clipwatch - watch a Twitch channel and clip its big moments."""
    if version:
        from clipwatch import __version__

        typer.echo(f"clipwatch {__version__}")
        raise typer.Exit()

    # verbose and quiet are mutually exclusive, quiet takes precedence
    if verbose and quiet:
        verbose = False

    setup_logging(verbose=verbose, quiet=quiet)

    ctx.meta["json"] = json
    ctx.meta["verbose"] = verbose
    ctx.meta["quiet"] = quiet
    ctx.meta["config_path"] = config_path

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def run_app() -> None:
    """Run the CLI app."""
    app()


# Command modules register themselves via @app.command()
from clipwatch.cli.commands import check  # noqa: E402,F401
from clipwatch.cli.commands import clip  # noqa: E402,F401
from clipwatch.cli.commands import snapshot  # noqa: E402,F401
from clipwatch.cli.commands import watch  # noqa: E402,F401
from clipwatch.cli.commands import config as config_cmd  # noqa: E402

app.add_typer(config_cmd.config_app, name="config")
