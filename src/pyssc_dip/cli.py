#!/usr/bin/env python3
"""Command-line DIP switch calculator for the Apple II Super Serial Card, using Typer."""

import json
import logging
from typing import Any, Optional

import typer
from typing_extensions import Annotated

from . import __version__  # type: ignore
from .errors import InvalidSettingError
from .normalize import (
    parse_baud_rate,
    parse_data_bits,
    parse_frame_format,
    parse_jumper_mode,
    parse_line_width,
    parse_operation_mode,
    parse_parity,
    parse_stop_bits,
)
from .resolver import frame_format, relevant_fields, resolve, summarize
from .tables import DEFAULT_BAUD_RATE, DEFAULT_LINE_WIDTH, get_default_tables
from .types import JumperMode, OperationMode, SerialCardConfig, SwitchBank

app = typer.Typer(
    name="pyssc",
    help="DIP switch calculator for the Apple II Super Serial Card.",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Shared options and helpers
# ============================================================================

ModeOption = Annotated[
    str,
    typer.Option("--mode", "-m", help="Operation mode: modem or printer", envvar="PYSSC_MODE"),
]
JumperOption = Annotated[
    Optional[str],
    typer.Option(
        "--jumper",
        "-j",
        help="Jumper block: modem/up or printer/down (default: same as --mode)",
        envvar="PYSSC_JUMPER",
    ),
]
BaudOption = Annotated[
    str,
    typer.Option("--baud", "-b", help="Baud rate (50-19200)", envvar="PYSSC_BAUD"),
]
DataBitsOption = Annotated[
    str,
    typer.Option("--data-bits", help="Data bits: 7 or 8 (modem only)", envvar="PYSSC_DATA_BITS"),
]
ParityOption = Annotated[
    str,
    typer.Option("--parity", help="Parity: none, odd or even (modem only)", envvar="PYSSC_PARITY"),
]
StopBitsOption = Annotated[
    str,
    typer.Option("--stop-bits", help="Stop bits: 1 or 2 (modem only)", envvar="PYSSC_STOP_BITS"),
]
FrameOption = Annotated[
    Optional[str],
    typer.Option(
        "--format",
        "-f",
        help="Frame format such as 8N1; overrides the three options above",
        envvar="PYSSC_FORMAT",
    ),
]
WidthOption = Annotated[
    str,
    typer.Option("--width", "-w", help="Printer line width: 40, 72, 80 or 132", envvar="PYSSC_WIDTH"),
]
ReturnDelayOption = Annotated[
    bool,
    typer.Option(
        "--return-delay/--no-return-delay",
        help="32ms delay after RETURN (printer only)",
        envvar="PYSSC_RETURN_DELAY",
    ),
]
AutoLineFeedOption = Annotated[
    bool,
    typer.Option(
        "--auto-line-feed/--no-auto-line-feed",
        help="Auto line feed after CR",
        envvar="PYSSC_AUTO_LINE_FEED",
    ),
]
InterruptsOption = Annotated[
    bool,
    typer.Option(
        "--interrupts/--no-interrupts",
        help="Enable interrupts (recommended for 1200 baud and up)",
        envvar="PYSSC_INTERRUPTS",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable debug logging"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Output as JSON"),
]


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbose flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if not verbose else "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def format_switch(state: bool) -> str:
    """ON/OFF label for one switch."""
    return "ON" if state else "OFF"


def format_bank(bank: SwitchBank) -> str:
    """One line per bank, e.g. 'SW1: 1=OFF 2=OFF 3=OFF 4=ON 5=ON 6=ON 7=ON'."""
    positions = " ".join(f"{i}={format_switch(state)}" for i, state in enumerate(bank, start=1))
    return f"{bank.label}: {positions}"


def build_config(
    mode: str,
    jumper: Optional[str],
    baud: str,
    data_bits: str,
    parity: str,
    stop_bits: str,
    frame: Optional[str],
    width: str,
    return_delay: bool,
    auto_line_feed: bool,
    interrupts: bool,
) -> SerialCardConfig:
    """Normalize raw option strings into a SerialCardConfig. Raises InvalidSettingError."""
    operation_mode = parse_operation_mode(mode)
    if jumper is None:
        jumper_mode = JumperMode(operation_mode.value)
    else:
        jumper_mode = parse_jumper_mode(jumper)

    if frame is not None:
        bits, par, stop = parse_frame_format(frame)
    else:
        bits, par, stop = parse_data_bits(data_bits), parse_parity(parity), parse_stop_bits(stop_bits)

    return SerialCardConfig(
        operation_mode=operation_mode,
        baud_rate=parse_baud_rate(baud),
        data_bits=bits,
        parity=par,
        stop_bits=stop,
        line_width=parse_line_width(width),
        auto_line_feed=auto_line_feed,
        enable_interrupts=interrupts,
        return_delay=return_delay,
        jumper_mode=jumper_mode,
    )


def _fail_unexpected(e: Exception, verbose: bool) -> None:
    typer.echo(f"Error: Unexpected error: {e}", err=True)
    if verbose:
        import traceback
        traceback.print_exc()
    raise typer.Exit(4)


# ============================================================================
# Commands
# ============================================================================

@app.command(name="resolve")
def resolve_command(
    mode: ModeOption = "modem",
    jumper: JumperOption = None,
    baud: BaudOption = DEFAULT_BAUD_RATE,
    data_bits: DataBitsOption = "8",
    parity: ParityOption = "none",
    stop_bits: StopBitsOption = "1",
    frame: FrameOption = None,
    width: WidthOption = str(DEFAULT_LINE_WIDTH),
    return_delay: ReturnDelayOption = False,
    auto_line_feed: AutoLineFeedOption = False,
    interrupts: InterruptsOption = True,
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
) -> None:
    """
    Compute SW1 and SW2 settings and the recommended slot.

    Data format options apply in modem mode; width and return delay apply in printer mode.
    """
    setup_logging(verbose)

    try:
        config = build_config(
            mode, jumper, baud, data_bits, parity, stop_bits, frame, width, return_delay, auto_line_feed, interrupts
        )
        settings = resolve(config)
        summary = summarize(config)

        if json_output:
            output: dict[str, Any] = {
                "sw1": list(settings.sw1),
                "sw2": list(settings.sw2),
                "slot": settings.slot.label,
                "frame": frame_format(config) if config.operation_mode == OperationMode.MODEM else None,
                "summary": summary,
            }
            typer.echo(json.dumps(output, indent=2))
        else:
            typer.echo(format_bank(settings.sw1))
            typer.echo(format_bank(settings.sw2))
            typer.echo("")
            for line in summary:
                typer.echo(f"  {line}")
    except InvalidSettingError as e:
        typer.echo(f"Error: Invalid setting: {e}", err=True)
        raise typer.Exit(2)
    except Exception as e:
        _fail_unexpected(e, verbose)


@app.command(name="baud-rates")
def baud_rates(
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
) -> None:
    """List the supported baud rates and their SW1 1-4 patterns."""
    setup_logging(verbose)

    try:
        tables = get_default_tables()
        if json_output:
            rows = [{"baud": baud, "sw1": list(bits)} for baud, bits in tables.baud_table.items()]
            typer.echo(json.dumps(rows, indent=2))
        else:
            for baud, bits in tables.baud_table.items():
                pattern = " ".join(f"{format_switch(b):>3}" for b in bits)
                marker = "  (fallback)" if baud == DEFAULT_BAUD_RATE else ""
                typer.echo(f"{baud:>6}  {pattern}{marker}")
    except Exception as e:
        _fail_unexpected(e, verbose)


@app.command()
def fields(
    mode: Annotated[str, typer.Argument(help="Operation mode: modem or printer")],
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
) -> None:
    """Show which settings affect the switches in the given mode."""
    setup_logging(verbose)

    try:
        operation_mode = parse_operation_mode(mode)
        names = relevant_fields(operation_mode)
        if json_output:
            typer.echo(json.dumps({"mode": operation_mode.value, "fields": list(names)}, indent=2))
        else:
            for name in names:
                typer.echo(name)
    except InvalidSettingError as e:
        typer.echo(f"Error: Invalid setting: {e}", err=True)
        raise typer.Exit(2)
    except Exception as e:
        _fail_unexpected(e, verbose)


@app.command()
def info(
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
) -> None:
    """Show package version and the loaded switch tables."""
    setup_logging(verbose)

    try:
        tables = get_default_tables()
        info_data = {
            "version": __version__,
            "card": tables.card,
            "baud_rates": len(tables.baud_rates),
            "line_widths": list(tables.line_widths),
        }
        if json_output:
            typer.echo(json.dumps(info_data, indent=2))
        else:
            typer.echo(f"pyssc-dip version: {info_data['version']}")
            typer.echo(f"Card: {info_data['card']}")
            typer.echo(f"Baud rates: {info_data['baud_rates']}")
            typer.echo(f"Line widths: {', '.join(str(w) for w in tables.line_widths)}")
    except Exception as e:
        _fail_unexpected(e, verbose)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"pyssc-dip {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """pyssc - DIP switch calculator for the Apple II Super Serial Card."""
    pass


if __name__ == "__main__":
    app()
