"""
Expression tree for compiled full-text search queries.

Nodes are immutable and carry no database bindings; `pg_search_scope.sql`
walks them to produce SQLAlchemy clauses.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union


class Wildcard(str, Enum):
    """Which search terms are turned into prefix matches."""

    NONE = "none"
    ALL = "all"
    LAST = "last"


class Operator(str, Enum):
    """Boolean operator joining search terms."""

    AND = "and"
    OR = "or"

    @property
    def symbol(self) -> str:
        return "&" if self is Operator.AND else "|"


class RankFunction(str, Enum):
    """PostgreSQL ranking functions."""

    TS_RANK = "ts_rank"
    TS_RANK_CD = "ts_rank_cd"


@dataclass(frozen=True)
class ColumnRef:
    """Column reference (e.g., 'title', 'documents.body')."""

    name: str
    table: str | None = None

    @classmethod
    def parse(cls, value: str) -> "ColumnRef":
        table, dot, name = value.strip().rpartition(".")
        return cls(name=name, table=table if dot else None)

    @classmethod
    def coerce(cls, value: Union["ColumnRef", str]) -> "ColumnRef":
        if isinstance(value, ColumnRef):
            return value
        if isinstance(value, str) and value.strip():
            return cls.parse(value)
        raise TypeError(f"Cannot use {value!r} as a column reference")

    @property
    def qualified_name(self) -> str:
        return f"{self.table}.{self.name}" if self.table else self.name

    def __str__(self) -> str:
        return self.qualified_name


@dataclass(frozen=True)
class Term:
    """A single search term, optionally marked as a prefix match."""

    text: str
    prefix: bool = False

    def mark_prefix(self) -> "Term":
        return self if self.prefix else replace(self, prefix=True)

    @property
    def lexeme(self) -> str:
        """Term quoted as a tsquery lexeme, e.g. ``'O''Brien':*``."""
        quoted = "'" + self.text.replace("\\", "\\\\").replace("'", "''") + "'"
        return f"{quoted}:*" if self.prefix else quoted

    def __str__(self) -> str:
        return f"{self.text}:*" if self.prefix else self.text


@dataclass(frozen=True)
class TsVector:
    """Document vector over one or more columns (to_tsvector)."""

    columns: tuple[ColumnRef, ...]
    language: str


@dataclass(frozen=True)
class TsQuery:
    """Boolean combination of terms (to_tsquery)."""

    terms: tuple[Term, ...]
    operator: Operator
    language: str

    @property
    def text(self) -> str:
        return f" {self.operator.symbol} ".join(term.lexeme for term in self.terms)


@dataclass(frozen=True)
class Rank:
    """Relevance score, e.g. ts_rank(vector, query, normalization)."""

    function: RankFunction
    vector: TsVector
    query: TsQuery
    normalization: int = 0


@dataclass(frozen=True)
class TextMatch:
    """The `vector @@ query` predicate."""

    vector: TsVector
    query: TsQuery


@dataclass(frozen=True)
class QueryPlan:
    """Compiled search: filter, rank projection and ordering."""

    scope_name: str
    filter: TextMatch | None = None
    rank: Rank | None = None
    project_rank_as: str | None = None  # alias for the projected rank column
    order_by_rank_desc: bool = False
    zero_rank_projection: bool = False  # project a literal 0 instead of a rank

    @property
    def is_degenerate(self) -> bool:
        """True when the search text produced no terms."""
        return self.filter is None

    def __repr__(self) -> str:
        parts = [f"QueryPlan(scope={self.scope_name!r}"]
        if self.filter:
            terms = ", ".join(str(term) for term in self.filter.query.terms)
            parts.append(f"terms=[{terms}]")
        if self.rank:
            parts.append(f"rank={self.rank.function.value}")
        if self.project_rank_as:
            parts.append(f"select={self.project_rank_as!r}")
        if self.zero_rank_projection:
            parts.append("zero_rank")
        return ", ".join(parts) + ")"
