"""Compiles search text and options into a QueryPlan."""

from collections.abc import Mapping
from typing import Any, Sequence

from loguru import logger

from pg_search_scope.ast import ColumnRef, QueryPlan, TextMatch
from pg_search_scope.builders import build_query, build_rank, build_vector
from pg_search_scope.errors import SearchScopeError
from pg_search_scope.options import (
    DEFAULT_OPTIONS,
    SearchOptions,
    SearchOptionsOverride,
    resolve_options,
)
from pg_search_scope.tokenizer import tokenize
from pg_search_scope.wildcard import apply_wildcard


def default_scope_name(columns: Sequence[ColumnRef | str]) -> str:
    """Scope name used when none is given, e.g. `search_by_name_and_address`."""
    names = [ColumnRef.coerce(column).name for column in columns]
    return "search_by_" + "_and_".join(names)


def rank_alias(scope_name: str) -> str:
    return f"{scope_name}_rank"


def compile_search(
    columns: Sequence[ColumnRef | str],
    search_text: str | None,
    defaults: SearchOptions = DEFAULT_OPTIONS,
    overrides: SearchOptionsOverride | Mapping[str, Any] | None = None,
) -> QueryPlan:
    """Compile a search over columns into a query plan.

    Args:
        columns: Columns whose text is searched
        search_text: Raw user input; None and blank input match every row
        defaults: Options declared for the scope
        overrides: Per-call options merged over the defaults

    Returns:
        QueryPlan with a `vector @@ query` filter, a rank expression and a
        descending rank ordering. When the text yields no terms the plan has
        no filter and no ordering, and projects a literal zero rank only if
        `select_rank` is set.

    Raises:
        SearchScopeError: If no columns are given
        InvalidOptionError: If an option is not recognized
    """
    columns = tuple(columns)
    if not columns:
        raise SearchScopeError("A search needs at least one column")

    options = resolve_options(defaults, overrides)
    scope_name = options.scope_name or default_scope_name(columns)
    project_rank_as = rank_alias(scope_name) if options.select_rank else None

    terms = tokenize(search_text or "")
    if not terms:
        logger.debug(f"{scope_name}: no search terms, skipping full-text filter")
        return QueryPlan(
            scope_name=scope_name,
            project_rank_as=project_rank_as,
            zero_rank_projection=options.select_rank,
        )

    terms = apply_wildcard(terms, options.wildcard)
    search_vector = build_vector(columns, options.language)

    # Ranking may use a narrower column set; the filter always uses `columns`
    rank_vector = search_vector
    if options.rank_columns:
        rank_vector = build_vector(options.rank_columns, options.language)

    query = build_query(terms, options.operator, options.language)
    rank = build_rank(rank_vector, query, options.rank_function, options.normalization)

    logger.debug(f"{scope_name}: compiled tsquery {query.text!r}")
    return QueryPlan(
        scope_name=scope_name,
        filter=TextMatch(vector=search_vector, query=query),
        rank=rank,
        project_rank_as=project_rank_as,
        order_by_rank_desc=True,
    )
