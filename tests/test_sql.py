"""Tests for rendering query plans as SQLAlchemy statements."""

import pytest
from sqlalchemy import select
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from pg_search_scope.compiler import compile_search
from pg_search_scope.options import DEFAULT_OPTIONS
from pg_search_scope.sql import apply_plan, search_statement


class Base(DeclarativeBase):
    pass


class Article(Base):
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str]
    body: Mapped[str]


class TestFilteredStatement:
    def test_single_column(self, people_table, render_sql):
        plan = compile_search(["name"], "Ivan", DEFAULT_OPTIONS)
        sql = render_sql(search_statement(plan, people_table))

        assert "to_tsvector(CAST('simple' AS REGCONFIG), coalesce(people.name, ''))" in sql
        assert "@@ to_tsquery(CAST('simple' AS REGCONFIG), '''Ivan'':*')" in sql
        assert "ORDER BY ts_rank(" in sql
        assert sql.rstrip().endswith("DESC")
        assert "search_by_name_rank" not in sql

    def test_multiple_columns_are_concatenated(self, people_table, render_sql):
        plan = compile_search(["name", "address"], "Ivan", DEFAULT_OPTIONS)
        sql = render_sql(search_statement(plan, people_table))

        assert "coalesce(people.name, '')" in sql
        assert "coalesce(people.address, '')" in sql
        assert "||" in sql

    def test_rank_projection(self, people_table, render_sql):
        plan = compile_search(
            ["name", "address"],
            "Ivan, Aurora st.",
            DEFAULT_OPTIONS,
            {"wildcard": "last", "select_rank": True, "as": "by_name_address"},
        )
        sql = render_sql(search_statement(plan, people_table))

        assert "AS by_name_address_rank" in sql
        assert "'''Ivan'' & ''Aurora'' & ''st'':*'" in sql

    def test_rank_function_and_normalization(self, people_table, render_sql):
        plan = compile_search(
            ["body"], "cat", DEFAULT_OPTIONS, {"rank_function": "ts_rank_cd", "normalization": 32}
        )
        sql = render_sql(search_statement(plan, people_table))

        assert "ORDER BY ts_rank_cd(" in sql
        assert ", 32) DESC" in sql

    def test_rank_columns_in_order_only(self, people_table, render_sql):
        plan = compile_search(
            ["title", "body"], "cat dog", DEFAULT_OPTIONS, {"rank_columns": ["title"]}
        )
        sql = render_sql(search_statement(plan, people_table))

        where, order = sql.split("ORDER BY")
        assert "people.body" in where
        assert "people.title" in order
        assert "people.body" not in order

    def test_language(self, people_table, render_sql):
        plan = compile_search(["body"], "cats", DEFAULT_OPTIONS, {"language": "english"})
        sql = render_sql(search_statement(plan, people_table))

        assert "CAST('simple' AS REGCONFIG)" not in sql
        assert sql.count("CAST('english' AS REGCONFIG)") >= 2

    def test_mapped_class(self, render_sql):
        plan = compile_search(["title", "body"], "cat", DEFAULT_OPTIONS)
        sql = render_sql(search_statement(plan, Article))

        assert "FROM articles" in sql
        assert "coalesce(articles.title, '')" in sql

    def test_unknown_column(self, people_table):
        plan = compile_search(["missing"], "cat", DEFAULT_OPTIONS)
        with pytest.raises(KeyError):
            search_statement(plan, people_table)


class TestDegenerateStatement:
    def test_zero_rank_projection(self, people_table, render_sql):
        plan = compile_search(["body"], "", DEFAULT_OPTIONS, {"select_rank": True, "as": "by_body"})
        sql = render_sql(search_statement(plan, people_table))

        assert "0 AS by_body_rank" in sql
        assert "WHERE" not in sql
        assert "ORDER BY" not in sql

    def test_statement_unchanged_without_rank(self, people_table, render_sql):
        stmt = select(people_table.c.id)
        plan = compile_search(["body"], None, DEFAULT_OPTIONS)

        assert render_sql(apply_plan(stmt, plan, people_table)) == render_sql(stmt)

    def test_apply_to_existing_statement(self, people_table, render_sql):
        stmt = select(people_table.c.id).where(people_table.c.id > 10)
        plan = compile_search(
            ["body"], "cat", DEFAULT_OPTIONS, {"select_rank": True, "as": "by_body"}
        )
        sql = render_sql(apply_plan(stmt, plan, people_table))

        assert sql.startswith("SELECT people.id, ts_rank(")
        assert "people.id > 10 AND" in sql
        assert "ORDER BY ts_rank(" in sql
