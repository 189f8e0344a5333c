#!/usr/bin/env python3
"""Command line entry point.

Usage::

    gslaunch [--dry-run] [--info] [--debug] [--config-dir DIR] [gamescope args] -- command [args...]

Anything before ``--`` that is not a launcher option is passed to gamescope
and replaces the configured ``GAMESCOPE_ARGS``.
"""

import argparse
import sys
from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gslaunch.assembler import ArgumentAssembler
from gslaunch.config import ConfigResolver, ResolvedConfig
from gslaunch.display.state import DisplayState
from gslaunch.errors import LaunchError
from gslaunch.launch import Launcher
from gslaunch.logging import Logger

logger = Logger(__name__)

SEPARATOR = "--"
LAUNCHER_FLAGS = ("--dry-run", "--info", "--debug")
LAUNCHER_VALUE_OPTIONS = ("--config-dir",)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _is_launcher_option(token: str) -> bool:
    return token in LAUNCHER_FLAGS or any(token.startswith(f"{o}=") for o in LAUNCHER_VALUE_OPTIONS)


def split_argv(argv: Sequence[str]) -> Tuple[List[str], List[str], List[str]]:
    """Split argv into (launcher options, gamescope args, command)."""
    argv = list(argv)
    own: List[str] = []

    if SEPARATOR not in argv:
        # Leading launcher options, then the command itself
        i = 0
        while i < len(argv):
            if _is_launcher_option(argv[i]):
                own.append(argv[i])
                i += 1
            elif argv[i] in LAUNCHER_VALUE_OPTIONS:
                own.extend(argv[i:i + 2])
                i += 2
            else:
                break
        return own, [], argv[i:]

    idx = argv.index(SEPARATOR)
    before, command = argv[:idx], argv[idx + 1:]
    passthrough: List[str] = []
    i = 0
    while i < len(before):
        token = before[i]
        if _is_launcher_option(token):
            own.append(token)
        elif token in LAUNCHER_VALUE_OPTIONS:
            own.extend(before[i:i + 2])
            i += 1
        else:
            passthrough.append(token)
        i += 1
    return own, passthrough, command


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gslaunch",
        description="Launch a game inside gamescope with auto-detected display settings",
        allow_abbrev=False,
    )
    parser.add_argument("--dry-run", action="store_true", help="print the resolved command without running it")
    parser.add_argument("--info", action="store_true", help="show the detected display state and exit")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    parser.add_argument("--config-dir", help="configuration directory (default: $XDG_CONFIG_HOME/gslaunch)")
    return parser.parse_args(argv)


def render_state(console: Console, variant: str, state: DisplayState) -> None:
    table = Table(title=f"Display ({variant})", show_header=False)
    table.add_column("key", style="bold")
    table.add_column("value")

    def signal_text(enabled: bool) -> str:
        if not state.signals_known:
            return "[dim]unknown[/dim]"
        return "[green]enabled[/green]" if enabled else "disabled"

    table.add_row("Output", escape(state.name or "-"))
    table.add_row("Primary", "yes" if state.primary else "no")
    table.add_row("Resolution", f"{state.width}x{state.height}")
    table.add_row("Refresh rate", f"{state.refresh_rate:g} Hz")
    table.add_row("HDR", signal_text(state.hdr_enabled))
    table.add_row("VRR", signal_text(state.vrr_enabled))
    console.print(table)


def render_command(console: Console, config: ResolvedConfig, argv: List[str]) -> None:
    table = Table(show_header=False, box=None)
    table.add_column("key", style="bold")
    table.add_column("value")
    table.add_row("Profile", config.profile.value)
    table.add_row("App", escape(config.app_id or "-"))
    table.add_row("Layers", escape(", ".join(str(p) for p in config.sources) or "none"))
    for key, value in config.exports.items():
        table.add_row("Export", escape(f"{key}={value}"))
    if config.pre_launch:
        table.add_row("Pre-launch", escape(config.pre_launch))
    if config.post_launch:
        table.add_row("Post-launch", escape(config.post_launch))
    table.add_row("Command", escape(" ".join(argv)))
    console.print(table)


def show_info(console: Console, resolver: ConfigResolver, gamescope_args: List[str]) -> int:
    config = resolver.resolve([], gamescope_args)
    assembler = ArgumentAssembler(config)
    state = assembler.query_display(assembler.preferred_output(config.base_args))
    render_state(console, assembler.variant.value, state)
    return EXIT_OK


def main(argv: Optional[list] = None) -> int:
    own, gamescope_args, command = split_argv(sys.argv[1:] if argv is None else argv)
    args = parse_args(own)
    if args.debug:
        Logger.set_level("DEBUG")

    console = Console()
    resolver = ConfigResolver(args.config_dir)

    try:
        if args.info:
            return show_info(console, resolver, gamescope_args)

        if not command:
            logger.error("no command given; usage: gslaunch [gamescope args] -- command [args...]")
            return EXIT_USAGE

        config = resolver.resolve(command, gamescope_args)
        if config.use_compositor:
            final_args = ArgumentAssembler(config).assemble()
        else:
            final_args = config.base_args

        launcher = Launcher(config)
        if args.dry_run:
            render_command(console, config, launcher.build_command(final_args, command))
            return EXIT_OK

        return launcher.launch(final_args, command)
    except LaunchError as e:
        logger.error(str(e))
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
