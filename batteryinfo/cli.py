from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from .collector import report
from .config import (
    COMPLETE_SEQUENCE,
    DEFAULT_SEQUENCE,
    InvalidFieldSelector,
    OutputFormat,
    RunConfiguration,
    resolve_sysfs_root,
    validate_sequence,
)
from .render import build_renderer

PROGRAM_NAME = "batteryinfo"
VERSION = "1.2.1"

SHORT_USAGE = f"""\
Usage: {PROGRAM_NAME} <output sequence>
           [-h | --help] [-v | --version] [-l | --license]
           [-a | --all] [-d | --digits] [-n | --name <name>] [-j | --json]
           [-N | --no-cap]
Use `{PROGRAM_NAME} -h' for more information.
"""

USAGE = f"""\
Usage: {PROGRAM_NAME} <output sequence>
           [-h | --help] [-v | --version] [-l | --license]
           [-a | --all] [-d | --digits] [-n | --name <name>] [-j | --json]
           [-N | --no-cap]

`output sequence' is a sequence of the below characters, in any order, which
determines what information is listed about available batteries. Fields are
displayed in the order in which their characters are given.
    n           battery name
    c           current charge, in %
    t           the maximum charge the battery can hold (in %), relative
                to what it was designed to hold
    v           current voltage, in V
    C           current current, in A
    T           current temperature, in deg. C
    d           battery driver
    m           battery model
    M           battery manufacturer
    e           battery technology
    s           current battery status
    h           battery health
    S           battery serial number
    H           battery charge type
    r           battery charge rate
    p           whether the battery is present or not
    o           whether the battery is online or not
    g           whether charging is enabled for this battery or not
    D           estimated time until the battery is completely discharged,
                in hours, assuming the current drain stays constant
If the output sequence is not provided, it defaults to:
        {DEFAULT_SEQUENCE}
Data that is not available is shown as "?" in text output and as null in
JSON output.

Options:
   -h,--help         display this help text.
   -v,--version      display the program's version.
   -l,--license      display this program's copyright and licensing
                     information.
   -a,--all          display every piece of data (the output sequence
                     becomes {COMPLETE_SEQUENCE}).
   -d,--digits       use "1" and "0" for flags instead of "yes" and "no"
                     (or true and false in JSON).
   -n,--name <name>  only display the battery with this name. If there is
                     none, the output is empty (an empty `batteries' array
                     in JSON).
   -j,--json         output battery information as JSON.
   -N,--no-cap       do not cap the computed charge at 100%.
   --sysfs-root      read batteries from another directory (default taken
                     from $BATTERYINFO_SYSFS_ROOT, then
                     /sys/class/power_supply).
   --verbose         enable debug logging.
"""

LICENSE = """\
Copyright (c) 2016 Joe Glancy

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <http://www.gnu.org/licenses/>.
"""

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": []},
)
console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format="%(message)s"
    )


def _info(text: str) -> NoReturn:
    err_console.print(text, end="", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit()


def _fail(message: str, *, usage: bool = False) -> NoReturn:
    err_console.print("[bold red]error[/bold red]: ", end="", soft_wrap=True)
    err_console.print(message, markup=False, highlight=False, soft_wrap=True)
    if usage:
        err_console.print(
            SHORT_USAGE, end="", markup=False, highlight=False, soft_wrap=True
        )
    raise typer.Exit(code=1)


def _help_callback(value: bool) -> None:
    if value:
        _info(USAGE)


def _version_callback(value: bool) -> None:
    if value:
        _info(f"{PROGRAM_NAME} v{VERSION}\n")


def _license_callback(value: bool) -> None:
    if value:
        _info(LICENSE)


@app.command()
def main_command(
    sequence: Optional[str] = typer.Argument(
        None, show_default=False, help="Output sequence (see --help)"
    ),
    output_all: bool = typer.Option(
        False, "--all", "-a", help="Display every piece of data"
    ),
    digits: bool = typer.Option(
        False, "--digits", "-d", help="Use 1/0 for flags instead of yes/no"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output JSON"),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Only display the battery with this name"
    ),
    no_cap: bool = typer.Option(
        False, "--no-cap", "-N", help="Do not cap the computed charge at 100%"
    ),
    sysfs_root: Optional[Path] = typer.Option(
        None,
        "--sysfs-root",
        help="Power supply directory (or set BATTERYINFO_SYSFS_ROOT)",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    show_help: Optional[bool] = typer.Option(
        None,
        "--help",
        "-h",
        is_eager=True,
        callback=_help_callback,
        help="Show this help and exit",
    ),
    show_version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        is_eager=True,
        callback=_version_callback,
        help="Show the version and exit",
    ),
    show_license: Optional[bool] = typer.Option(
        None,
        "--license",
        "-l",
        is_eager=True,
        callback=_license_callback,
        help="Show copyright and licensing information and exit",
    ),
) -> None:
    """Report battery status from the kernel's power supply directory."""
    configure_logging(verbose)

    if name is not None and not name:
        _fail("battery name must be a non-empty string for argument `-n'.")

    # --all replaces the sequence, so a bad one is irrelevant then.
    if sequence is not None and not output_all:
        try:
            validate_sequence(sequence)
        except InvalidFieldSelector as exc:
            _fail(str(exc), usage=True)

    config = RunConfiguration(
        output_format=OutputFormat.JSON if json_output else OutputFormat.TEXT,
        sequence=sequence if sequence is not None else DEFAULT_SEQUENCE,
        output_all=output_all,
        digits=digits,
        name=name,
        disable_charge_cap=no_cap,
        sysfs_root=resolve_sysfs_root(sysfs_root),
    )
    renderer = build_renderer(config, console)
    try:
        report(config, renderer)
    except OSError as exc:
        _fail(
            f'couldn\'t open directory "{config.sysfs_root}": '
            f"{exc.strerror or exc}"
        )


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
