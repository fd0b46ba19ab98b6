"""
keytally - Interactive Keystroke Tally Command-Line Interface
=============================================================

This module implements the interactive `keytally` command. Every key you
press is counted; the live display shows all counts, highest first.

Usage Examples
--------------
Count without saving:
    $ keytally

Keep counts in a save file between runs:
    $ keytally counts.json

Give keys readable labels up front:
    $ keytally -a=apples -b=bananas counts.json

Log to a file while counting:
    $ keytally counts.json --log-file keytally.log --verbose

Only long options are defined, so that -X=LABEL arguments reach the
label parser untouched.

Copyright (c) 2026 keytally contributors
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

import click

from keytally import __version__
from keytally.cli.errors import handle_cli_exception
from keytally.cli.terminal import HELP_TEXT, read_key, redraw, split_keys
from keytally.config import TallyConfig, parse_startup_args
from keytally.errors import LoadError, SaveError
from keytally.tally import Normal, RecordStore, TallyMachine, load_store, render, save_store

# Logger for this module
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# =============================================================================
# Session Loop
# =============================================================================

def run_session(
    machine: TallyMachine,
    config: TallyConfig,
    read: Callable[[], Optional[str]] = read_key,
    show: Callable[[str], None] = redraw,
) -> None:
    """
    Run the interactive loop until the user quits.

    Each keypress is fed to the machine and the screen is redrawn. The
    help key in Normal mode is never counted, pasted or typed alone; it
    shows the help screen until the next keypress.

    Args:
        machine: State machine holding the tally
        config: Display settings
        read: Returns the next keypress, or None to quit
        show: Displays one full screen of text
    """
    show(render(machine, config))

    while True:
        chunk = read()
        if chunk is None:
            break

        wants_help = False
        for ch in split_keys(chunk):
            if ch == config.help_key and isinstance(machine.mode, Normal):
                wants_help = True
            else:
                machine.feed(ch)

        if wants_help:
            show(HELP_TEXT.format(help_key=config.help_key))
            if read() is None:
                break
        show(render(machine, config))

    logger.debug("Session ended")


def build_store(config: TallyConfig, seeds: Sequence[Tuple[str, str]]) -> RecordStore:
    """
    Create the session's store: label seeds first, then the save file.

    Records in the save file replace seeds for the same key.
    """
    store = RecordStore()
    for key, label in seeds:
        store.seed(key, label)
        logger.debug(f"Seeded {key!r} as {label!r}")
    return load_store(config.save_file, store)


def configure_logging(log_file: Optional[Path], verbose: bool) -> None:
    """Send log records to log_file. The terminal belongs to the display."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write log messages to this file",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Log debug messages (with --log-file)",
)
@click.version_option(__version__, "--version", prog_name="keytally")
def main(args: tuple[str, ...], log_file: Optional[Path], verbose: bool) -> None:
    """
    Count keystrokes interactively.

    ARGS are label seeds of the form -X=LABEL (key X is shown as LABEL)
    and an optional save file. Counts are loaded from the save file at
    startup and written back when you quit.

    \b
    Keys:
      any key   count it and select it
      =         relabel the selected key
      + / -     add to / subtract from the selected key
      Enter     finish, Esc cancel
      Ctrl-C    save and quit

    \b
    Examples:
      keytally counts.json
      keytally -a=apples -b=bananas counts.json
    """
    configure_logging(log_file, verbose)

    config = TallyConfig.from_env()
    startup = parse_startup_args(args)
    if startup.save_file is not None:
        config.save_file = startup.save_file

    try:
        store = build_store(config, startup.seeds)
        machine = TallyMachine(store)
        run_session(machine, config)
        save_store(config.save_file, machine.store)
    except LoadError as e:
        handle_cli_exception(e, verbose=verbose, error_type="Load")
    except SaveError as e:
        handle_cli_exception(e, verbose=verbose, error_type="Save")
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    if config.save_file is not None:
        click.echo(f"Saved {len(machine.store)} records to {config.save_file}")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
