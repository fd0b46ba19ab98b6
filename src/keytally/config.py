"""
keytally Configuration
======================

Display settings and startup-argument handling. Configuration can come
from:
- Default values (defined here)
- Environment variables
- Command-line arguments (save file path and label seeds)

Startup Arguments
-----------------
Each argument of the form -X=LABEL, where X is a single character and
LABEL contains no whitespace, seeds key X with that label before any
input is processed. Any other argument names the save file; when several
are given the last one wins.

    $ keytally -a=apples -b=bananas fruit.json

Copyright (c) 2026 keytally contributors
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import os
import re


# Matches a label seed argument: -X=LABEL
SEED_PATTERN = re.compile(r"^-(.)=(\S+)$", re.DOTALL)


@dataclass
class TallyConfig:
    """
    Configuration for a tally session.

    Attributes:
        save_file: Where counts are loaded from and saved to (None = don't persist)
        min_width: Minimum width of the label column (default: 20)
        padding: Gap between the longest label and the counts (default: 4)
        help_key: Key that shows the help screen in Normal mode (default: "?")
    """

    save_file: Optional[Path] = None
    min_width: int = 20
    padding: int = 4
    help_key: str = "?"

    @classmethod
    def from_env(cls) -> "TallyConfig":
        """
        Create TallyConfig from environment variables.

        Environment variables (all optional):
            KEYTALLY_SAVE_FILE: Default save file path
            KEYTALLY_MIN_WIDTH: Minimum label column width (integer)
            KEYTALLY_PADDING: Column padding (integer)

        Returns:
            TallyConfig with values from environment variables
        """
        config = cls()

        if save_file := os.environ.get("KEYTALLY_SAVE_FILE"):
            config.save_file = Path(save_file)

        if min_width := os.environ.get("KEYTALLY_MIN_WIDTH"):
            try:
                config.min_width = int(min_width)
            except ValueError:
                pass  # Ignore invalid values

        if padding := os.environ.get("KEYTALLY_PADDING"):
            try:
                config.padding = int(padding)
            except ValueError:
                pass

        return config


# =============================================================================
# Startup Arguments
# =============================================================================

@dataclass
class StartupArgs:
    """
    Parsed positional arguments.

    Attributes:
        seeds: (key, label) pairs in command-line order
        save_file: Last non-seed argument, or None
    """
    seeds: List[Tuple[str, str]] = field(default_factory=list)
    save_file: Optional[Path] = None


def parse_startup_args(args: Sequence[str]) -> StartupArgs:
    """
    Split command-line arguments into label seeds and a save file path.

    Args:
        args: Positional arguments (program name excluded)

    Returns:
        StartupArgs with the seeds and save file

    Example:
        >>> parsed = parse_startup_args(["-a=apples", "fruit.json"])
        >>> parsed.seeds
        [('a', 'apples')]
    """
    parsed = StartupArgs()
    for arg in args:
        match = SEED_PATTERN.match(arg)
        if match is None:
            parsed.save_file = Path(arg)
            continue
        parsed.seeds.append((match.group(1), match.group(2)))
    return parsed


# =============================================================================
# Default Configuration Instance
# =============================================================================

_default_config: Optional[TallyConfig] = None


def get_default_config() -> TallyConfig:
    """
    Get the default configuration.

    Created from environment variables on first access.
    """
    global _default_config
    if _default_config is None:
        _default_config = TallyConfig.from_env()
    return _default_config


def set_default_config(config: Optional[TallyConfig]) -> None:
    """
    Set the default configuration.

    Passing None makes the next get_default_config() re-read the
    environment.
    """
    global _default_config
    _default_config = config
