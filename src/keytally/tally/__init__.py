"""
Tally Core
==========

The parts of keytally with real logic, free of any terminal I/O:

- **records**: Record and RecordStore
- **machine**: the modal input state machine (TallyMachine, transition)
- **render**: formats the store and entry state as one text block
- **persistence**: JSON save files with atomic replacement

Quick Start
-----------
    >>> from keytally.tally import TallyMachine, render
    >>> machine = TallyMachine()
    >>> machine.feed_text("aaa")
    >>> print(render(machine).splitlines()[0])
    a (a):              3
"""

# =============================================================================
# Public API Exports
# =============================================================================

from keytally.tally.records import COUNT_MAX, Record, RecordStore
from keytally.tally.machine import (
    CANCEL,
    COMMIT,
    InputState,
    Normal,
    NumberEntry,
    RelabelEntry,
    Sign,
    TallyMachine,
    parse_amount,
    transition,
)
from keytally.tally.render import format_records, render, render_state
from keytally.tally.persistence import dump_store, load_store, parse_store, save_store

__all__ = [
    # Records
    "COUNT_MAX",
    "Record",
    "RecordStore",
    # State machine
    "CANCEL",
    "COMMIT",
    "InputState",
    "Normal",
    "NumberEntry",
    "RelabelEntry",
    "Sign",
    "TallyMachine",
    "parse_amount",
    "transition",
    # Rendering
    "format_records",
    "render",
    "render_state",
    # Persistence
    "dump_store",
    "load_store",
    "parse_store",
    "save_store",
]
