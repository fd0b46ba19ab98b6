"""
Tally Screen Renderer
=====================

Formats the current tally as one text block for the live display.

Output Format
-------------
While an entry is in progress a header line and a separator come first:

    relabel a (a) as: app
    - - -

    a (a) = 3 + 5
    - - -

Then every record, highest count first (ties broken by label), with the
counts lined up in one column, and a footer:

    apples (a):         7
    b (b):              2

    Press the '?' key for help.

Rendering is a pure function of the interpreter state and the store; it
never reorders the store itself.

Copyright (c) 2026 keytally contributors
"""

from typing import List, Optional

from keytally.config import TallyConfig, get_default_config
from keytally.tally.machine import InputState, NumberEntry, RelabelEntry, TallyMachine
from keytally.tally.records import Record, RecordStore

SEPARATOR = "- - -"


def format_header(state: InputState, store: RecordStore) -> Optional[str]:
    """
    Build the entry-in-progress line, or None in Normal mode.

    Args:
        state: Current interpreter state
        store: Record store holding the selected record
    """
    mode = state.mode
    if not isinstance(mode, (RelabelEntry, NumberEntry)):
        return None

    record = store.get(state.selected_key) or Record(key=state.selected_key)
    if isinstance(mode, RelabelEntry):
        return f"relabel {record.label} ({record.key}) as: {mode.buffer}"
    return f"{record.label} ({record.key}) = {record.count} {mode.sign.value} {mode.buffer}"


def format_records(records: List[Record], min_width: int = 20, padding: int = 4) -> List[str]:
    """
    Format records as aligned 'label (key):  count' lines.

    The label column is as wide as the longest cell plus padding, and
    never narrower than min_width.
    """
    cells = [f"{record.label} ({record.key}):" for record in records]
    if not cells:
        return []
    width = max(min_width, max(len(cell) for cell in cells) + padding)
    return [f"{cell:<{width}}{record.count}" for cell, record in zip(cells, records)]


def render_state(
    state: InputState,
    store: RecordStore,
    config: Optional[TallyConfig] = None,
) -> str:
    """
    Render the full screen for the given state.

    Args:
        state: Current interpreter state
        store: Record store to display
        config: Display settings (default configuration if omitted)

    Returns:
        Text block with '\\n' line breaks
    """
    if config is None:
        config = get_default_config()

    lines = []
    header = format_header(state, store)
    if header is not None:
        lines.append(header)
        lines.append(SEPARATOR)

    lines.extend(format_records(store.ordered_view(), config.min_width, config.padding))

    lines.append("")
    lines.append(f"Press the '{config.help_key}' key for help.")
    return "\n".join(lines)


def render(machine: TallyMachine, config: Optional[TallyConfig] = None) -> str:
    """Render the screen for a TallyMachine."""
    return render_state(machine.state, machine.store, config)
