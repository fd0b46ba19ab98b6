"""
keytally - Keystroke Tally Counter
==================================

An interactive terminal tally counter. Every key you press is counted
against its own record; the selected key can be relabelled or adjusted by
an arbitrary amount, and the counts can be kept in a JSON save file
between runs.

Main Components
---------------
- **tally**: record store, input state machine, renderer and save files
- **config**: display settings and startup-argument parsing
- **cli**: the interactive `keytally` command

Quick Start
-----------
    >>> from keytally import TallyMachine, load_store, save_store
    >>> machine = TallyMachine(load_store("counts.json"))
    >>> machine.feed_text("aab")
    >>> save_store("counts.json", machine.store)

Or from the shell:
    $ keytally -a=apples -b=bananas counts.json

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"
__author__ = "keytally contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from keytally.errors import (
    TallyError,
    PersistenceError,
    LoadError,
    SaveError,
)
from keytally.config import (
    TallyConfig,
    StartupArgs,
    parse_startup_args,
    get_default_config,
    set_default_config,
)
from keytally.tally import (
    COUNT_MAX,
    Record,
    RecordStore,
    InputState,
    Normal,
    RelabelEntry,
    NumberEntry,
    Sign,
    TallyMachine,
    transition,
    render,
    render_state,
    load_store,
    save_store,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Exception hierarchy
    "TallyError",
    "PersistenceError",
    "LoadError",
    "SaveError",
    # Configuration
    "TallyConfig",
    "StartupArgs",
    "parse_startup_args",
    "get_default_config",
    "set_default_config",
    # Tally core
    "COUNT_MAX",
    "Record",
    "RecordStore",
    "InputState",
    "Normal",
    "RelabelEntry",
    "NumberEntry",
    "Sign",
    "TallyMachine",
    "transition",
    "render",
    "render_state",
    "load_store",
    "save_store",
]
