"""Registry of named search scopes.

A scope binds a name to the columns it searches and the options it was
declared with:

    registry = SearchScopeRegistry()
    registry.register("name")                      # search_by_name
    registry.register("name", "address", wildcard="last")
    plan = registry.compile("search_by_name_and_address", "Ivan, Aurora st.", select_rank=True)
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loguru import logger

from pg_search_scope.ast import ColumnRef, QueryPlan
from pg_search_scope.compiler import compile_search, default_scope_name
from pg_search_scope.errors import (
    InvalidOptionError,
    ScopeRegistrationError,
    UnknownScopeError,
)
from pg_search_scope.options import (
    DEFAULT_OPTIONS,
    SearchOptions,
    SearchOptionsOverride,
    parse_overrides,
    resolve_options,
)

if TYPE_CHECKING:  # pragma: no cover
    from pg_search_scope.config import SearchScopeConfig


@dataclass(frozen=True)
class SearchScope:
    """A registered search: name, searched columns and declared options."""

    name: str
    columns: tuple[ColumnRef, ...]
    defaults: SearchOptions

    def compile(
        self,
        search_text: str | None,
        overrides: SearchOptionsOverride | Mapping[str, Any] | None = None,
    ) -> QueryPlan:
        """Compile a search with per-call overrides.

        Raises:
            InvalidOptionError: If the overrides try to rename the scope
        """
        override = parse_overrides(overrides)
        if "scope_name" in override.model_fields_set and override.scope_name != self.name:
            raise InvalidOptionError(
                "as", override.scope_name, f"scope name is fixed at registration as {self.name!r}"
            )
        return compile_search(self.columns, search_text, self.defaults, override)

    def __call__(self, search_text: str | None = None, **overrides: Any) -> QueryPlan:
        return self.compile(search_text, overrides)


class SearchScopeRegistry:
    """Maps scope names to search scopes."""

    def __init__(self, defaults: SearchOptions = DEFAULT_OPTIONS):
        self.defaults = defaults
        self._scopes: dict[str, SearchScope] = {}

    @classmethod
    def from_config(cls, config: "SearchScopeConfig") -> "SearchScopeRegistry":
        """Create a registry whose defaults come from configuration."""
        return cls(defaults=config.default_options())

    def register(self, *columns: ColumnRef | str, **options: Any) -> SearchScope:
        """Declare a search scope over columns.

        Args:
            *columns: Columns to search, e.g. "name", "people.address"
            **options: Scope options; `as` (or `scope_name`) names the scope,
                otherwise the name is `search_by_<col>_and_<col>`

        Returns:
            The registered SearchScope

        Raises:
            ScopeRegistrationError: If no columns are given or the name is taken
            InvalidOptionError: If an option is not recognized
        """
        if not columns:
            raise ScopeRegistrationError("A search scope needs at least one column")

        refs = tuple(ColumnRef.coerce(column) for column in columns)
        scope_options = resolve_options(self.defaults, options)
        name = scope_options.scope_name or default_scope_name(refs)
        if name in self._scopes:
            raise ScopeRegistrationError(f"Search scope {name!r} is already registered")

        scope = SearchScope(
            name=name,
            columns=refs,
            defaults=scope_options.model_copy(update={"scope_name": name}),
        )
        self._scopes[name] = scope
        logger.debug(f"registered search scope {name} over {[str(ref) for ref in refs]}")
        return scope

    def get(self, name: str) -> SearchScope:
        try:
            return self._scopes[name]
        except KeyError:
            raise UnknownScopeError(name) from None

    def compile(self, name: str, search_text: str | None = None, **overrides: Any) -> QueryPlan:
        """Look up a scope by name and compile a search with it."""
        return self.get(name).compile(search_text, overrides)

    def names(self) -> list[str]:
        return list(self._scopes)

    def __contains__(self, name: object) -> bool:
        return name in self._scopes

    def __iter__(self) -> Iterator[SearchScope]:
        return iter(self._scopes.values())

    def __len__(self) -> int:
        return len(self._scopes)
