#!/usr/bin/env python3
"""
Terminal Clock command line
Picks a mode, loads the configuration and runs the frame loop.

Usage: terminal-clock [options] [debug | chrono | countdown DURATION | timer DURATION]

Controls:
- Ctrl+C: Quit
- Space: Pause/resume (chrono, countdown, timer)
- R: Reset (chrono, countdown, timer)
- L: Record a lap (chrono)
- Up/Down, Page Up/Down: Scroll laps (chrono)
"""

import argparse
import logging
import sys
from pathlib import Path

import colorama
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from terminal_clock import __version__
from terminal_clock.config import default_config_path, load_from_file, write_default_config
from terminal_clock.debug import print_debug_infos
from terminal_clock.errors import TerminalClockError
from terminal_clock.logging_config import setup_logging
from terminal_clock.modes import Mode, create_driver, run_frame_loop
from terminal_clock.terminal import Terminal
from terminal_clock.timing import parse_duration

logger = logging.getLogger(__name__)

console = Console(highlight=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terminal-clock",
        description="Full-screen terminal clock, stopwatch and countdown"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", metavar="FILE", help="Configuration file to use")
    parser.add_argument("-r", "--regenerate-default", action="store_true",
                        help="Rewrite the default configuration file and exit")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", metavar="FILE", help="Write logs to this file")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("debug", help="Print the configuration and color scheme")
    subparsers.add_parser("chrono", help="Stopwatch with laps")
    countdown = subparsers.add_parser("countdown", help="Count down from a duration")
    countdown.add_argument("duration", nargs="+", help="Duration, e.g. 5m 30s")
    timer = subparsers.add_parser("timer", help="Run a timer for a duration")
    timer.add_argument("duration", nargs="+", help="Duration, e.g. 1h 15m")

    return parser


def resolve_config_path(args) -> tuple:
    """Return (path, whether the default file was just generated)"""
    if args.config:
        return Path(args.config), False

    path = default_config_path()
    if not path.exists():
        write_default_config(path)
        return path, True
    return path, False


def regenerate_default(path: Path, just_generated: bool, assume_yes: bool) -> bool:
    """Rewrite the default configuration, asking first if one exists"""
    if not just_generated and path.exists() and not assume_yes:
        console.print(f"A config file is already located at {escape(str(path))}")
        if not Confirm.ask("Do you really want to recreate it?", default=False, console=console):
            console.print("Cancelled.")
            return False

    write_default_config(path)
    console.print("Done.")
    return True


def run(args):
    mode = Mode(args.command) if args.command else Mode.CLOCK

    path, just_generated = resolve_config_path(args)
    if args.regenerate_default:
        regenerate_default(path, just_generated, args.yes)
        return

    config = load_from_file(path, debug=mode == Mode.DEBUG)

    if mode == Mode.DEBUG:
        print_debug_infos(config, console)
        return

    # Parse before touching the terminal so a bad duration fails cleanly
    duration = parse_duration(" ".join(args.duration)) if mode in (Mode.COUNTDOWN, Mode.TIMER) else None
    driver = create_driver(mode, config, duration)

    with Terminal() as term:
        run_frame_loop(config, term, driver)

    if config.be_polite:
        console.print("CTRL-C pressed, bye!\n")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)
    colorama.just_fix_windows_console()

    try:
        run(args)
    except KeyboardInterrupt:
        pass
    except (TerminalClockError, OSError) as e:
        logger.debug("Fatal error", exc_info=True)
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
