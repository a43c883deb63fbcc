"""Compile a search from the command line and print the SQL or the plan."""

import json
from enum import Enum
from typing import Annotated, Any, Optional

import typer
from loguru import logger
from rich.markup import escape
from sqlalchemy import Text, column, table
from sqlalchemy.dialects import postgresql

from pg_search_scope.ast import ColumnRef, Operator, QueryPlan, RankFunction, Wildcard
from pg_search_scope.cli.app import app, error_console
from pg_search_scope.compiler import compile_search
from pg_search_scope.config import SearchScopeConfig
from pg_search_scope.errors import SearchScopeError
from pg_search_scope.sql import search_statement


class OutputFormat(str, Enum):
    SQL = "sql"
    JSON = "json"


def describe_plan(plan: QueryPlan) -> dict[str, Any]:
    """JSON-friendly summary of a plan."""
    description: dict[str, Any] = {
        "scope_name": plan.scope_name,
        "filter": None,
        "rank": None,
        "project_rank_as": plan.project_rank_as,
        "order_by_rank_desc": plan.order_by_rank_desc,
        "zero_rank_projection": plan.zero_rank_projection,
    }
    if plan.filter is not None:
        query = plan.filter.query
        description["filter"] = {
            "columns": [str(ref) for ref in plan.filter.vector.columns],
            "language": query.language,
            "operator": query.operator.value,
            "terms": [str(term) for term in query.terms],
            "tsquery": query.text,
        }
    if plan.rank is not None:
        description["rank"] = {
            "function": plan.rank.function.value,
            "columns": [str(ref) for ref in plan.rank.vector.columns],
            "normalization": plan.rank.normalization,
        }
    return description


def render_sql(plan: QueryPlan, table_name: str, columns: list[ColumnRef]) -> str:
    """Render the plan as a SELECT over an ad-hoc table with literal values inlined."""
    names = list(dict.fromkeys(ref.name for ref in columns))
    target = table(table_name, *[column(name, Text) for name in names])
    stmt = search_statement(plan, target)
    return str(
        stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True})
    )


@app.command("compile")
def compile_command(
    search_text: Annotated[str, typer.Argument(help="Search text, e.g. 'Ivan, Aurora st.'")],
    columns: Annotated[
        list[str], typer.Option("--column", "-c", help="Column to search (repeatable)")
    ],
    table_name: Annotated[str, typer.Option("--table", "-t", help="Table name")] = "documents",
    scope_name: Annotated[Optional[str], typer.Option("--as", help="Scope name")] = None,
    wildcard: Annotated[Optional[Wildcard], typer.Option(help="Prefix matching policy")] = None,
    operator: Annotated[Optional[Operator], typer.Option(help="Term operator")] = None,
    normalization: Annotated[
        Optional[int], typer.Option(help="Rank normalization bitmask")
    ] = None,
    select_rank: Annotated[
        Optional[bool], typer.Option("--select-rank/--no-select-rank", help="Project the rank")
    ] = None,
    language: Annotated[
        Optional[str], typer.Option(help="Text search configuration")
    ] = None,
    rank_function: Annotated[
        Optional[RankFunction], typer.Option(help="Rank function")
    ] = None,
    rank_columns: Annotated[
        Optional[list[str]],
        typer.Option("--rank-column", help="Rank by this column instead (repeatable)"),
    ] = None,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", help="Output format")
    ] = OutputFormat.SQL,
):
    """Compile SEARCH_TEXT into a full-text search query."""
    overrides = {
        "as": scope_name,
        "wildcard": wildcard,
        "operator": operator,
        "normalization": normalization,
        "select_rank": select_rank,
        "language": language,
        "rank_function": rank_function,
        "rank_columns": rank_columns or None,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}

    try:
        column_refs = [ColumnRef.coerce(name) for name in columns]
        defaults = SearchScopeConfig().default_options()
        plan = compile_search(column_refs, search_text, defaults, overrides)
    except (SearchScopeError, TypeError) as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    logger.debug(f"compiled {plan!r}")
    if output_format is OutputFormat.JSON:
        typer.echo(json.dumps(describe_plan(plan), indent=2))
        return

    rank_refs = list(plan.rank.vector.columns) if plan.rank else []
    typer.echo(render_sql(plan, table_name, column_refs + rank_refs))
