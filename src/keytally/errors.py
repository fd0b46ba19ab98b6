"""
keytally Error Hierarchy
========================

This module defines the exception hierarchy for keytally. All exceptions
inherit from TallyError, allowing callers to catch every keytally error
with a single except clause if desired.

Exception Hierarchy
-------------------
TallyError (base)
└── PersistenceError (save file handling)
    ├── LoadError - save file exists but cannot be read or parsed
    └── SaveError - save file cannot be written or replaced

The tally core itself (record store, input state machine, renderer) never
raises: every keystroke is either applied or ignored. Only the persistence
codec reports failures, and the CLI turns them into exit codes.

Error messages follow this format:
    path: error: description
    hint: suggestion for fixing (when available)

Copyright (c) 2026 keytally contributors
"""

from pathlib import Path
from typing import Optional, Union


# =============================================================================
# Base Exception Class
# =============================================================================

class TallyError(Exception):
    """
    Base exception for all keytally errors.

        try:
            store = load_store(path)
        except TallyError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Persistence Exceptions
# =============================================================================

class PersistenceError(TallyError):
    """
    Base exception for save file errors.

    Attributes:
        message: The error description
        path: The save file involved (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.path = Path(path) if path is not None else None
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with path prefix and hint.

        Example output:
            counts.json: error: entry 'a' has a negative count
            hint: counts must be whole numbers of zero or more
        """
        if self.path is not None:
            parts = [f"{self.path}: error: {self.message}"]
        else:
            parts = [f"error: {self.message}"]

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class LoadError(PersistenceError):
    """
    Save file exists but cannot be turned into a record store.

    Raised for unreadable files, invalid JSON, and JSON whose shape is not
    a mapping of key to record. A missing or empty file is not an error.
    """
    pass


class SaveError(PersistenceError):
    """
    Save file could not be written.

    Raised when the temporary file cannot be created or written, or when
    it cannot be moved over the previous save file. The previous file is
    left untouched in every case.
    """
    pass
