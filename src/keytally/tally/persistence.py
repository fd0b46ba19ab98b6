"""
Tally Save Files
================

Loads a RecordStore from a JSON save file and atomically rewrites it.

File Format
-----------
The save file is a JSON object mapping each key to its record:

    {
      "a": {"label": "apples", "key": 97, "count": 7},
      "b": {"label": "b", "key": 98, "count": 2}
    }

The record's "key" is the key's Unicode codepoint. When reading, the
mapping key may also be given as a decimal codepoint ("97"), the record
"key" as the character itself, and the field names Label/Rune/Count
written by earlier releases are accepted. A missing label defaults to the
key and a missing count to zero.

Because the file is a mapping, the insertion order of records is not
preserved across a save/load cycle. Display order is unaffected since it
is recomputed from counts and labels.

Atomic Saves
------------
The store is written to a temporary file in the save file's directory,
which is then moved over the save file in a single rename. A failure at
any point leaves the previous save file intact.

Copyright (c) 2026 keytally contributors
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging
import os
import tempfile

from keytally.errors import LoadError, SaveError
from keytally.tally.records import COUNT_MAX, Record, RecordStore

# Logger for this module
logger = logging.getLogger(__name__)

# Accepted spellings of each record field, preferred spelling first
FIELD_ALIASES = {
    "label": ("label", "Label"),
    "key": ("key", "Rune", "rune"),
    "count": ("count", "Count"),
}


# =============================================================================
# In-Memory Conversion
# =============================================================================

def dump_store(store: RecordStore) -> Dict[str, Dict[str, Any]]:
    """
    Convert a store to its JSON-ready mapping.

    Args:
        store: Record store to serialize

    Returns:
        Mapping of key to {"label", "key", "count"}
    """
    return {
        record.key: {
            "label": record.label,
            "key": record.codepoint,
            "count": record.count,
        }
        for record in store
    }


def _decode_key(raw: Any, where: str) -> str:
    """Decode a key given as a single character or a codepoint."""
    if isinstance(raw, bool):
        raise LoadError(f"{where}: key must be a character or codepoint, not {raw!r}")
    if isinstance(raw, int):
        try:
            return chr(raw)
        except (ValueError, OverflowError):
            raise LoadError(f"{where}: invalid codepoint {raw}") from None
    if isinstance(raw, str):
        if len(raw) == 1:
            return raw
        if raw.isdecimal() and raw.isascii():
            return _decode_key(int(raw), where)
    raise LoadError(f"{where}: key must be a single character or codepoint, got {raw!r}")


def _field(entry: Dict[str, Any], name: str) -> Any:
    for alias in FIELD_ALIASES[name]:
        if alias in entry:
            return entry[alias]
    return None


def _decode_record(map_key: str, entry: Any) -> Record:
    """Decode one mapping entry into a Record."""
    key = _decode_key(map_key, "entry")
    where = f"entry {key!r}"

    if not isinstance(entry, dict):
        raise LoadError(f"{where}: expected an object, got {type(entry).__name__}")

    raw_key = _field(entry, "key")
    if raw_key is not None:
        record_key = _decode_key(raw_key, where)
        if record_key != key:
            logger.warning(f"Save file {where} names key {record_key!r}; using {key!r}")

    label = _field(entry, "label")
    if label is None:
        label = key
    elif not isinstance(label, str):
        raise LoadError(f"{where}: label must be text, got {label!r}")

    count = _field(entry, "count")
    if count is None:
        count = 0
    elif isinstance(count, bool) or not isinstance(count, int):
        raise LoadError(f"{where}: count must be a whole number, got {count!r}")
    elif not 0 <= count <= COUNT_MAX:
        raise LoadError(f"{where}: count {count} is out of range")

    return Record(key=key, label=label, count=count)


def parse_store(data: Any, store: Optional[RecordStore] = None) -> RecordStore:
    """
    Populate a store from decoded JSON data.

    Records from data replace same-key records already in store (for
    example startup seeds). The ordered sequence is then rebuilt from the
    mapping.

    Args:
        data: Decoded JSON document
        store: Store to populate (a new empty one by default)

    Returns:
        The populated store

    Raises:
        LoadError: If data is not a mapping of key to record
    """
    if store is None:
        store = RecordStore()

    if not isinstance(data, dict):
        raise LoadError(f"expected an object mapping keys to records, got {type(data).__name__}")

    for map_key, entry in data.items():
        store.put(_decode_record(map_key, entry))

    store.rebuild_order()
    return store


# =============================================================================
# File Operations
# =============================================================================

def load_store(
    path: Optional[Union[str, Path]],
    store: Optional[RecordStore] = None,
) -> RecordStore:
    """
    Load a store from a save file.

    A missing path, a missing file and an empty file all give back the
    store unchanged (a new empty one by default).

    Args:
        path: Save file path, or None when not persisting
        store: Store to load into (a new empty one by default)

    Returns:
        The populated store

    Raises:
        LoadError: If the file cannot be read or parsed
    """
    if store is None:
        store = RecordStore()
    if path is None:
        return store

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info(f"No save file at {path}, starting empty")
        return store
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"cannot read save file: {e}", path=path) from e

    if not text.strip():
        logger.info(f"Save file {path} is empty, starting empty")
        return store

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LoadError(
            f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}",
            path=path,
        ) from e

    try:
        parse_store(data, store)
    except LoadError as e:
        raise LoadError(e.message, path=path) from e

    logger.info(f"Loaded {len(store)} records from {path}")
    return store


def save_store(path: Optional[Union[str, Path]], store: RecordStore) -> None:
    """
    Atomically write a store to a save file.

    Does nothing when path is None.

    Args:
        path: Save file path, or None when not persisting
        store: Store to save

    Raises:
        SaveError: If any step fails; the previous file is left intact
    """
    if path is None:
        return

    path = Path(path)
    directory = path.parent

    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=directory, prefix=f".{path.name}.", suffix=".tmp"
        )
    except OSError as e:
        raise SaveError(f"cannot create temporary file: {e}", path=path) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(dump_store(store), f, ensure_ascii=False, indent=2)
            f.write("\n")
        # replaces any previous save file in one step
        os.replace(tmp_name, path)
    except (OSError, TypeError, ValueError) as e:
        try:
            os.unlink(tmp_name)
        except OSError as cleanup_error:
            logger.warning(f"Could not remove {tmp_name}: {cleanup_error}")
        raise SaveError(f"cannot write save file: {e}", path=path) from e

    logger.info(f"Saved {len(store)} records to {path}")
