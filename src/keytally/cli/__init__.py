"""
keytally Command-Line Interface
===============================

This package provides the interactive `keytally` command:

- **keytally**: the click command and session loop
- **terminal**: single-keypress input and screen redraw
- **errors**: exit codes and error reporting
"""

__all__ = ["keytally", "terminal", "errors"]
