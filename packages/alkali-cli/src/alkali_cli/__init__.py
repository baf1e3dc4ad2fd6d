"""alkali-cli: Command line interface for alkali.

Provides the ``alkali`` command with ``init`` and ``compile`` subcommands.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
