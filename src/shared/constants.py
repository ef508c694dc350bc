"""Shared constants used by the action entrypoint and its helpers."""

from __future__ import annotations

DEFAULT_API_URL = "https://api.github.com"

# GitHub caps list endpoints at 100 items per page
PAGE_SIZE = 100

# Only these input values turn a boolean input on
TRUE_LITERALS = frozenset({"true"})

COMMENT_HEADING = "### Invalid Commit Messages:"
