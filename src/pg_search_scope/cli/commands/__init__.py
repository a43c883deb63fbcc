"""CLI commands for pg-search-scope."""

from . import compile

__all__ = [
    "compile",
]
