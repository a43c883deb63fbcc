from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from pg_search_scope.config import SearchScopeConfig
from pg_search_scope.utils import setup_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        import pg_search_scope

        typer.echo(f"pg-search-scope version: {pg_search_scope.__version__}")
        raise typer.Exit()


app = typer.Typer(name="pg-search-scope", no_args_is_help=True)

error_console = Console(stderr=True)


@app.callback()
def app_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ERROR). Defaults to PG_SEARCH_LOG_LEVEL.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """pg-search-scope - compile search text into PostgreSQL full-text search queries."""
    try:
        setup_logging(log_level or SearchScopeConfig().log_level)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] invalid log level: {escape(str(e))}")
        raise typer.Exit(1)
