"""
audiodelta.cli - Typer CLI entry point.

Provides the delta, probe and init subcommands. Failures print one line to stderr
and exit with the error's code.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from audiodelta import __version__
from audiodelta.config import DeltaConfig, load_config, merge_overrides, write_config
from audiodelta.exceptions import (
    ArgumentsInvalidError,
    AudioDeltaError,
    CannotOpenFileError,
    ErrorCode,
)
from audiodelta.extract import probe_audio
from audiodelta.logging import configure_logging
from audiodelta.sync import measure_delta
from audiodelta.utils import format_duration, format_rate
from audiodelta.validation import validate_audio_file, validate_path_count

app = typer.Typer(
    name="audiodelta",
    help="Estimate the time offset between two audio recordings.\n\n"
    "Compares two channels of one file, or the first channel of two files, "
    "by FFT cross-correlation.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"audiodelta {__version__}")
        raise typer.Exit()


def fail(error: Exception) -> NoReturn:
    """Report an error on stderr and exit with its code."""
    code = error.code if isinstance(error, AudioDeltaError) else ErrorCode.UNKNOWN
    err_console.print(f"[red]Error: {escape(str(error))}[/red]", soft_wrap=True)
    raise typer.Exit(int(code))


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """audiodelta - audio offset estimation."""
    pass


@app.command("delta")
def delta(
    files: list[str] = typer.Argument(None, help="One file (two channels) or two files"),
    config_path: str | None = typer.Option(
        None, "--config", "-c", help="YAML file with channel, rate and buffer settings"
    ),
    rate: int | None = typer.Option(
        None, "--rate", "-r", help="Force the common sample rate (Hz)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Measure the lag between two recordings.

    Prints the delta in samples, the common sample rate and the delta in
    milliseconds.
    """
    configure_logging(verbose)

    try:
        paths = files or []
        validate_path_count(paths)

        config = DeltaConfig()
        if config_path is not None:
            try:
                config = load_config(Path(config_path))
            except FileNotFoundError as e:
                raise CannotOpenFileError(str(e)) from e
        config = merge_overrides(config, sample_rate=rate)

        second = Path(paths[1]) if len(paths) == 2 else None
        report = measure_delta(Path(paths[0]), second, config)
    except Exception as e:
        fail(e)

    for line in report.lines():
        console.print(line, highlight=False)


@app.command("probe")
def probe(
    file: str = typer.Argument(..., help="Media file to inspect"),
) -> None:
    """Show the audio stream that delta would read from a file."""
    try:
        info = probe_audio(validate_audio_file(Path(file)))
    except Exception as e:
        fail(e)

    table = Table(title=Path(file).name)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Stream", str(info["stream_index"]))
    table.add_row("Codec", info["codec"] or "-")
    table.add_row("Sample format", info["format"] or "-")
    table.add_row("Sample rate", format_rate(info["sample_rate"]))
    table.add_row("Channels", str(info["channels"]))
    table.add_row("Layout", info["layout"] or "-")
    table.add_row("Duration", format_duration(info["duration_seconds"]))
    console.print(table)


@app.command("init")
def init_config(
    path: str = typer.Argument("audiodelta.yaml", help="Where to write the config file"),
    rate: int | None = typer.Option(
        None, "--rate", "-r", help="Sample rate to store in the config (Hz)"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a config file with the default settings, for use with delta --config."""
    config_path = Path(path)
    try:
        if config_path.exists() and not force:
            raise ArgumentsInvalidError("already exists (use --force to overwrite)", path=path)
        config = merge_overrides(DeltaConfig(), sample_rate=rate)
        write_config(config, config_path)
    except Exception as e:
        fail(e)

    console.print(f"[green]✓[/green] Wrote {escape(str(config_path))}")
