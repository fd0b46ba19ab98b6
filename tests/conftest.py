"""
keytally Test Configuration
===========================

Shared fixtures for the keytally test suite.

It provides:
- an isolated default configuration (no environment leakage)
- fresh stores and machines
- a save file path inside pytest's tmp_path
"""

import logging

import pytest
from pathlib import Path

from keytally.config import TallyConfig, set_default_config
from keytally.tally import RecordStore, TallyMachine


@pytest.fixture(autouse=True)
def default_config(monkeypatch) -> TallyConfig:
    """
    Fixture: Known default configuration for every test.

    Clears keytally environment variables so the host's settings never
    change rendering or save paths.
    """
    for name in ("KEYTALLY_SAVE_FILE", "KEYTALLY_MIN_WIDTH", "KEYTALLY_PADDING"):
        monkeypatch.delenv(name, raising=False)
    config = TallyConfig()
    set_default_config(config)
    yield config
    set_default_config(None)


@pytest.fixture
def store() -> RecordStore:
    """Fixture: Empty record store."""
    return RecordStore()


@pytest.fixture
def machine(store: RecordStore) -> TallyMachine:
    """Fixture: Machine in Normal mode bound to the store fixture."""
    return TallyMachine(store)


@pytest.fixture
def save_path(tmp_path: Path) -> Path:
    """Fixture: Save file path that does not exist yet."""
    return tmp_path / "counts.json"


@pytest.fixture
def restore_logging():
    """Fixture: Remove log files and levels a test adds to the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler) and handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
