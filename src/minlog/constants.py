"""minlog constants.

Keyword spellings and the default bounds applied while building expression
trees. These are the single source of truth for the parser, the config
defaults and the CLI.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Keywords
# =============================================================================

#: Binary conjunction keyword (matched case-insensitively).
KEYWORD_AND: Final[str] = "AND"

#: Binary disjunction keyword (matched case-insensitively).
KEYWORD_OR: Final[str] = "OR"

#: Prefix negation keyword; must be fused to its opening parenthesis.
KEYWORD_NOT: Final[str] = "NOT"

#: Boolean literal keywords.
KEYWORD_TRUE: Final[str] = "TRUE"
KEYWORD_FALSE: Final[str] = "FALSE"

# =============================================================================
# Limits
# =============================================================================

#: Node count at which the tree builder aborts; at most 999 nodes fold.
DEFAULT_OPERATION_LIMIT: Final[int] = 1000

#: Maximum parenthesis nesting the sequencer recurses into.
DEFAULT_MAX_DEPTH: Final[int] = 64

# =============================================================================
# Configuration
# =============================================================================

#: Prefix for environment variables read by the configuration layer.
ENV_PREFIX: Final[str] = "MINLOG_"

#: File name of the project-level configuration file.
PROJECT_CONFIG_FILENAME: Final[str] = "minlog.yaml"
