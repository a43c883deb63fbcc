"""pg_search_scope - compile search text into PostgreSQL full-text search plans."""

__version__ = "0.1.0"

from pg_search_scope.ast import (
    ColumnRef,
    Operator,
    QueryPlan,
    Rank,
    RankFunction,
    Term,
    TextMatch,
    TsQuery,
    TsVector,
    Wildcard,
)
from pg_search_scope.builders import build_query, build_rank, build_vector
from pg_search_scope.compiler import compile_search, default_scope_name
from pg_search_scope.errors import (
    EmptyQueryError,
    InvalidOptionError,
    ScopeRegistrationError,
    SearchScopeError,
    UnknownScopeError,
)
from pg_search_scope.options import (
    DEFAULT_OPTIONS,
    SearchOptions,
    SearchOptionsOverride,
    resolve_options,
)
from pg_search_scope.registry import SearchScope, SearchScopeRegistry
from pg_search_scope.tokenizer import tokenize
from pg_search_scope.wildcard import apply_wildcard

__all__ = [
    # AST
    "ColumnRef",
    "Operator",
    "QueryPlan",
    "Rank",
    "RankFunction",
    "Term",
    "TextMatch",
    "TsQuery",
    "TsVector",
    "Wildcard",
    # Compiler
    "apply_wildcard",
    "build_query",
    "build_rank",
    "build_vector",
    "compile_search",
    "default_scope_name",
    "tokenize",
    # Errors
    "EmptyQueryError",
    "InvalidOptionError",
    "ScopeRegistrationError",
    "SearchScopeError",
    "UnknownScopeError",
    # Options
    "DEFAULT_OPTIONS",
    "SearchOptions",
    "SearchOptionsOverride",
    "resolve_options",
    # Registry
    "SearchScope",
    "SearchScopeRegistry",
]
