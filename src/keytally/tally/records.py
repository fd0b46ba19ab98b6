"""
Tally Records
=============

This module defines the Record data structure and the RecordStore that
owns every record of a tally session.

A record is created the first time its key is touched by any operation
(a startup seed, a keystroke, or a loaded save file) and lives until the
process ends. Records are never deleted.

Store Layout
------------
The store keeps two views of the same records:

- a mapping from key to Record, used for lookups
- an insertion-ordered list, used for stable iteration

Every key in the mapping appears exactly once in the list and vice versa.
Display order (count descending, then label ascending) is computed on
demand by ordered_view() and never written back to the list.

Counts
------
Counts are unsigned 64-bit values. Subtraction clamps at zero and
addition clamps at COUNT_MAX; neither ever raises.

Copyright (c) 2026 keytally contributors
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional
import logging

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Largest count a record can hold (unsigned 64-bit)
COUNT_MAX = 2**64 - 1


# =============================================================================
# Record
# =============================================================================

@dataclass
class Record:
    """
    Tally of a single key.

    Attributes:
        key: The identifying character (immutable once created)
        label: Display label, defaults to the key itself
        count: Number of occurrences, 0 <= count <= COUNT_MAX
    """
    key: str
    label: Optional[str] = None
    count: int = 0

    def __post_init__(self) -> None:
        if self.label is None:
            self.label = self.key

    @property
    def codepoint(self) -> int:
        """Unicode codepoint of the key, as stored in save files."""
        return ord(self.key)

    def sort_key(self) -> tuple:
        """Key for display ordering: highest count first, then label."""
        return (-self.count, self.label)

    def __str__(self) -> str:
        return f"{self.label} ({self.key}): {self.count}"


# =============================================================================
# Record Store
# =============================================================================

@dataclass
class RecordStore:
    """
    Holds one Record per distinct key.

    All mutating operations create an unseen key first, with the default
    label and a zero count, so callers never need to check for existence.

    Example:
        >>> store = RecordStore()
        >>> store.increment("a", 3)
        >>> store.decrement("a", 5)
        >>> store.get("a").count
        0
        >>> store.relabel("a", "apples")
        >>> str(store.get("a"))
        'apples (a): 0'
    """
    _records: Dict[str, Record] = field(default_factory=dict, init=False)
    _order: List[Record] = field(default_factory=list, init=False)

    # -------------------------------------------------------------------------
    # Creation and lookup
    # -------------------------------------------------------------------------

    def ensure(self, key: str) -> Record:
        """
        Return the record for key, creating it if needed.

        Args:
            key: A single character

        Returns:
            The existing or newly created record
        """
        record = self._records.get(key)
        if record is None:
            record = Record(key=key)
            self._add(record)
            logger.debug(f"Created record for key {key!r}")
        return record

    def get(self, key: str) -> Optional[Record]:
        """Return the record for key, or None if it was never touched."""
        return self._records.get(key)

    def seed(self, key: str, label: str) -> Record:
        """
        Pre-seed a record with a label before any input is processed.

        A new record starts with a zero count; an existing record only has
        its label replaced.
        """
        record = self.ensure(key)
        record.label = label
        return record

    def put(self, record: Record) -> None:
        """
        Insert a complete record, replacing any record with the same key.

        Used by the persistence codec. A replaced record keeps its position
        in the ordered sequence.
        """
        existing = self._records.get(record.key)
        if existing is None:
            self._add(record)
            return
        index = self._order.index(existing)
        self._order[index] = record
        self._records[record.key] = record

    def rebuild_order(self) -> None:
        """Rebuild the ordered sequence from the mapping's iteration order."""
        self._order = list(self._records.values())

    def _add(self, record: Record) -> None:
        self._records[record.key] = record
        self._order.append(record)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def increment(self, key: str, delta: int = 1) -> None:
        """
        Add delta to the key's count, saturating at COUNT_MAX.

        Args:
            key: A single character
            delta: Non-negative amount to add
        """
        record = self.ensure(key)
        total = record.count + delta
        if total > COUNT_MAX:
            logger.warning(f"Count for {key!r} saturated at {COUNT_MAX}")
            total = COUNT_MAX
        record.count = total

    def decrement(self, key: str, delta: int = 1) -> None:
        """
        Subtract delta from the key's count, clamping at zero.

        Args:
            key: A single character
            delta: Non-negative amount to subtract
        """
        record = self.ensure(key)
        record.count = max(0, record.count - delta)

    def relabel(self, key: str, new_label: str) -> None:
        """Set the key's label. The count is left untouched."""
        record = self.ensure(key)
        logger.debug(f"Relabel {key!r}: {record.label!r} -> {new_label!r}")
        record.label = new_label

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def ordered_view(self) -> List[Record]:
        """
        Return the records in display order.

        Records are sorted by count (highest first), ties broken by label
        (lexicographic). The stored insertion order is not modified.
        """
        return sorted(self._order, key=Record.sort_key)

    def keys(self) -> List[str]:
        """Keys in insertion order."""
        return [record.key for record in self._order]

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._order))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records
