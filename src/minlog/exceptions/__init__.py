"""minlog exception hierarchy.

All exceptions can be imported from this package:
    from minlog.exceptions import MinlogError, ConfigError

Expression-specific errors live in ``minlog.expressions.errors`` and derive
from :class:`MinlogError` as well.
"""

from __future__ import annotations

# Base exception
from minlog.exceptions.base import MinlogError

# Configuration exceptions
from minlog.exceptions.config import ConfigError

__all__ = [
    # Base
    "MinlogError",
    # Config
    "ConfigError",
]
