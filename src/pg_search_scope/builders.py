"""Builders for the tsvector, tsquery and rank expressions of a search."""

from typing import Iterable, Sequence

from pg_search_scope.ast import (
    ColumnRef,
    Operator,
    Rank,
    RankFunction,
    Term,
    TsQuery,
    TsVector,
)
from pg_search_scope.errors import EmptyQueryError, SearchScopeError


def build_vector(columns: Iterable[ColumnRef | str], language: str) -> TsVector:
    """Build a document vector over columns, in the order given.

    Column existence is not checked here; the database reports unknown columns.
    """
    refs = tuple(ColumnRef.coerce(column) for column in columns)
    if not refs:
        raise SearchScopeError("A search vector needs at least one column")
    return TsVector(columns=refs, language=language)


def build_query(terms: Sequence[Term], operator: Operator, language: str) -> TsQuery:
    """Combine terms into a tsquery with a single boolean operator.

    Raises:
        EmptyQueryError: If terms is empty. Callers check the term count first.
    """
    if not terms:
        raise EmptyQueryError("Cannot build a tsquery from zero terms")
    return TsQuery(terms=tuple(terms), operator=operator, language=language)


def build_rank(
    vector: TsVector, query: TsQuery, function: RankFunction, normalization: int
) -> Rank:
    return Rank(function=function, vector=vector, query=query, normalization=normalization)
