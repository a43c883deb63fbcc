"""Main CLI entry point for pg-search-scope."""  # pragma: no cover

from pg_search_scope.cli.app import app  # pragma: no cover

# Register commands
from pg_search_scope.cli.commands import compile  # noqa: F401  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
