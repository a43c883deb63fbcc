"""Render compiled search plans as SQLAlchemy Core clauses for PostgreSQL.

For a scope over `name` and `address` searching "Ivan" this produces:

    WHERE to_tsvector(CAST('simple' AS REGCONFIG),
                      coalesce(name, '') || ' ' || coalesce(address, ''))
          @@ to_tsquery(CAST('simple' AS REGCONFIG), '''Ivan'':*')
    ORDER BY ts_rank(<vector>, <query>, 0) DESC
"""

from typing import Any

from sqlalchemy import (
    Float,
    FromClause,
    Select,
    cast,
    func,
    inspect,
    literal,
    literal_column,
    select,
)
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.sql.elements import ColumnElement

from pg_search_scope.ast import QueryPlan, Rank, TextMatch, TsQuery, TsVector


def _selectable(target: Any) -> FromClause:
    """Accept a Table/FromClause or an ORM-mapped class (or alias)."""
    if isinstance(target, FromClause):
        return target
    return inspect(target).selectable


def _regconfig(language: str) -> ColumnElement:
    return cast(literal(language), REGCONFIG)


def vector_clause(vector: TsVector, target: Any) -> ColumnElement:
    """to_tsvector over the columns joined with spaces, NULLs read as ''."""
    table = _selectable(target)
    columns = [func.coalesce(table.c[ref.name], "") for ref in vector.columns]

    document = columns[0]
    for column in columns[1:]:
        document = document.concat(" ").concat(column)
    return func.to_tsvector(_regconfig(vector.language), document)


def query_clause(query: TsQuery) -> ColumnElement:
    return func.to_tsquery(_regconfig(query.language), literal(query.text))


def match_clause(match: TextMatch, target: Any) -> ColumnElement:
    return vector_clause(match.vector, target).bool_op("@@")(query_clause(match.query))


def rank_clause(rank: Rank, target: Any) -> ColumnElement:
    rank_function = getattr(func, rank.function.value)
    return rank_function(
        vector_clause(rank.vector, target),
        query_clause(rank.query),
        literal(rank.normalization),
        type_=Float,
    )


def apply_plan(stmt: Select, plan: QueryPlan, target: Any) -> Select:
    """Add the plan's filter, rank column and ordering to a SELECT.

    Args:
        stmt: Statement to extend, usually `select(target)`
        plan: Plan from `compile_search`
        target: Table or mapped class that owns the searched columns

    Returns:
        The extended statement. Degenerate plans add no filter and no ordering,
        only a literal `0` rank column when the plan asks for one.
    """
    if plan.filter is None or plan.rank is None:
        if plan.zero_rank_projection and plan.project_rank_as:
            stmt = stmt.add_columns(literal_column("0").label(plan.project_rank_as))
        return stmt

    rank = rank_clause(plan.rank, target)
    if plan.project_rank_as:
        stmt = stmt.add_columns(rank.label(plan.project_rank_as))

    stmt = stmt.where(match_clause(plan.filter, target))
    if plan.order_by_rank_desc:
        stmt = stmt.order_by(rank.desc())
    return stmt


def search_statement(plan: QueryPlan, target: Any) -> Select:
    """SELECT every column of target, filtered and ordered by the plan."""
    return apply_plan(select(target), plan, target)
