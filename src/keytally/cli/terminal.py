"""
Terminal Input and Display
==========================

Single-keypress reads and full-screen redraws for the interactive
session, built on click's terminal helpers. click.getchar() switches the
terminal into raw mode for the duration of each read, so no terminal
state has to be restored on exit.

Copyright (c) 2026 keytally contributors
"""

from typing import List, Optional

import click

from keytally.tally.machine import CANCEL

# Ctrl-C and Ctrl-D, when they arrive as characters rather than signals
QUIT_KEYS = ("\x03", "\x04")

HELP_TEXT = """\
keytally - count keystrokes

  any key     count one for that key and select it
  =           relabel the selected key, then type the label
  +  /  -     add to / subtract from the selected key, then type a number
  Enter       finish the label or number
  Esc         cancel the label or number
  {help_key:<12}show this help
  Ctrl-C      save and quit
  Ctrl-D      save and quit

Press any key to return."""


def read_key() -> Optional[str]:
    """
    Wait for one keypress.

    Returns:
        The characters produced by the keypress, or None when the user
        asked to quit (Ctrl-C, Ctrl-D, or end of input)
    """
    try:
        chunk = click.getchar()
    except (KeyboardInterrupt, EOFError):
        return None
    if not chunk or chunk in QUIT_KEYS:
        return None
    return chunk


def split_keys(chunk: str) -> List[str]:
    """
    Split a keypress into characters for the state machine.

    Multi-character escape sequences (arrow keys, function keys) are
    dropped whole so that their leading ESC doesn't cancel an entry.
    """
    if len(chunk) > 1 and chunk.startswith(CANCEL):
        return []
    return [ch for ch in chunk if ch not in QUIT_KEYS]


def redraw(text: str) -> None:
    """Clear the screen and show text."""
    click.clear()
    click.echo(text)
