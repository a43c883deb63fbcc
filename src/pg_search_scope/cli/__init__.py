"""Command line interface for pg_search_scope."""
