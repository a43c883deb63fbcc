"""Common fixtures for pg_search_scope tests."""

import pytest
from sqlalchemy import Text, column, table
from sqlalchemy.dialects import postgresql

from pg_search_scope.registry import SearchScopeRegistry

CONFIG_ENV_VARS = [
    "PG_SEARCH_WILDCARD",
    "PG_SEARCH_OPERATOR",
    "PG_SEARCH_NORMALIZATION",
    "PG_SEARCH_SELECT_RANK",
    "PG_SEARCH_LANGUAGE",
    "PG_SEARCH_RANK_FUNCTION",
    "PG_SEARCH_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Keep PG_SEARCH_* settings from the outer environment out of tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def people_table():
    """Lightweight table with text columns."""
    return table(
        "people",
        column("id"),
        column("name", Text),
        column("address", Text),
        column("title", Text),
        column("body", Text),
    )


@pytest.fixture
def render_sql():
    """Compile a statement to PostgreSQL with literal values inlined."""

    def render(stmt) -> str:
        return str(
            stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True})
        )

    return render


@pytest.fixture
def registry() -> SearchScopeRegistry:
    return SearchScopeRegistry()
