"""
Tally Input State Machine
=========================

Interprets a stream of single characters and applies them to a
RecordStore.

Modes
-----
- **Normal**: every printable key is counted and becomes the selected key
- **RelabelEntry**: typing a new label for the selected key
- **NumberEntry**: typing an amount to add to or subtract from it

Key Bindings
------------
    ESC      cancel the current entry
    Enter    commit the current entry
    =        start relabelling the selected key (Normal mode only)
    +        start adding to the selected key
    -        start subtracting from the selected key
    0-9      digits of the amount (NumberEntry)

Selection Compensation
----------------------
Selecting a key is itself a Normal-mode keystroke, so it has already
counted once. Committing a relabel or an amount, and cancelling a
relabel, take that one count back off. Cancelling an amount does not,
and an amount that fails to parse (for example an empty one) skips the
compensation too, leaving the selecting keystroke counted.

The transition itself is the pure function transition(); TallyMachine
is a small stateful wrapper around it for the interactive loop.

Copyright (c) 2026 keytally contributors
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union
import logging

from keytally.tally.records import COUNT_MAX, RecordStore

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Control Characters
# =============================================================================

CANCEL = "\x1b"          # ESC
COMMIT = ("\r", "\n")    # Enter/Return (raw terminals send CR)
RELABEL_START = "="
ADD_START = "+"
SUBTRACT_START = "-"

DIGITS = "0123456789"


# =============================================================================
# Modes
# =============================================================================

class Sign(Enum):
    """Direction of a NumberEntry adjustment."""
    ADD = "+"
    SUBTRACT = "-"


@dataclass(frozen=True)
class Normal:
    """Counting mode."""
    pass


@dataclass(frozen=True)
class RelabelEntry:
    """Typing a new label for the selected key."""
    buffer: str = ""


@dataclass(frozen=True)
class NumberEntry:
    """Typing an amount to apply to the selected key."""
    buffer: str = ""
    sign: Sign = Sign.ADD


Mode = Union[Normal, RelabelEntry, NumberEntry]


@dataclass(frozen=True)
class InputState:
    """
    Complete interpreter state.

    Attributes:
        mode: Current mode, carrying its pending buffer
        selected_key: Target of relabel/adjust entries, or None
    """
    mode: Mode = Normal()
    selected_key: Optional[str] = None


def parse_amount(buffer: str) -> Optional[int]:
    """
    Parse a NumberEntry buffer as an unsigned 64-bit integer.

    Returns:
        The amount, or None if the buffer is empty or out of range
    """
    if not buffer or any(ch not in DIGITS for ch in buffer):
        return None
    amount = int(buffer)
    if amount > COUNT_MAX:
        return None
    return amount


# =============================================================================
# Transition Function
# =============================================================================

def transition(
    state: InputState,
    ch: str,
    store: RecordStore,
) -> Tuple[InputState, bool]:
    """
    Apply one input character.

    The first matching rule wins. Store mutations are applied directly to
    store; the new interpreter state is returned.

    Args:
        state: Current interpreter state
        ch: A single input character
        store: Record store to mutate

    Returns:
        Tuple of (new state, handled). handled is False for characters
        that have no meaning in the current state.
    """
    if len(ch) != 1:
        return state, False

    mode = state.mode
    selected = state.selected_key

    if ch == CANCEL:
        if isinstance(mode, RelabelEntry):
            # the selecting keystroke didn't count
            store.decrement(selected, 1)
            return InputState(Normal(), None), True
        if isinstance(mode, NumberEntry):
            return InputState(Normal(), selected), True
        return state, False

    if ch in COMMIT:
        if isinstance(mode, RelabelEntry):
            store.relabel(selected, mode.buffer)
            store.decrement(selected, 1)
            return InputState(Normal(), None), True
        if isinstance(mode, NumberEntry):
            amount = parse_amount(mode.buffer)
            if amount is not None:
                store.decrement(selected, 1)
                if mode.sign is Sign.ADD:
                    store.increment(selected, amount)
                else:
                    store.decrement(selected, amount)
            else:
                logger.debug(f"Discarded amount {mode.buffer!r} for {selected!r}")
            return InputState(Normal(), selected), True
        return state, False

    if ch == RELABEL_START:
        if isinstance(mode, Normal) and selected is not None:
            return InputState(RelabelEntry(), selected), True
        return state, False

    if ch in (ADD_START, SUBTRACT_START):
        if not isinstance(mode, RelabelEntry) and selected is not None:
            sign = Sign.ADD if ch == ADD_START else Sign.SUBTRACT
            return InputState(NumberEntry(sign=sign), selected), True
        return state, True

    if ch.isprintable():
        if isinstance(mode, Normal):
            store.increment(ch, 1)
            return InputState(mode, ch), True
        if isinstance(mode, RelabelEntry):
            return replace(state, mode=RelabelEntry(mode.buffer + ch)), True
        if ch in DIGITS:
            return replace(state, mode=replace(mode, buffer=mode.buffer + ch)), True
        return state, True

    return state, False


# =============================================================================
# Stateful Wrapper
# =============================================================================

class TallyMachine:
    """
    Input state machine bound to a record store.

    Example:
        >>> machine = TallyMachine()
        >>> machine.feed_text("aaa+5\\r")
        >>> machine.store.get("a").count
        7
    """

    def __init__(self, store: Optional[RecordStore] = None):
        """
        Initialize the machine in Normal mode with nothing selected.

        Args:
            store: Record store to mutate (a new empty one by default)
        """
        self.store = store if store is not None else RecordStore()
        self.state = InputState()

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def selected_key(self) -> Optional[str]:
        return self.state.selected_key

    def feed(self, ch: str) -> bool:
        """
        Process one input character.

        Returns:
            True if the character was handled
        """
        self.state, handled = transition(self.state, ch, self.store)
        return handled

    def feed_text(self, text: str) -> None:
        """Process each character of text in turn."""
        for ch in text:
            self.feed(ch)
