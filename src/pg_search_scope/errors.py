"""
Custom exceptions for search scope compilation.
"""

from typing import Any


class SearchScopeError(Exception):
    """Base exception for all search scope errors."""

    pass


class InvalidOptionError(SearchScopeError, ValueError):
    """Raised when a search option has an unrecognized or malformed value."""

    def __init__(self, option: str, value: Any, reason: str | None = None):
        self.option = option
        self.value = value
        message = f"Invalid value for option '{option}': {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class EmptyQueryError(SearchScopeError, AssertionError):
    """Raised when a tsquery is built from zero terms.

    The compiler only builds queries for non-empty term lists, so seeing this
    means a caller skipped the term-count check.
    """

    pass


class ScopeRegistrationError(SearchScopeError):
    """Raised when a search scope cannot be registered."""

    pass


class UnknownScopeError(SearchScopeError, KeyError):
    """Raised when looking up a scope name that was never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown search scope: {name!r}")

    def __str__(self) -> str:
        return self.args[0]
