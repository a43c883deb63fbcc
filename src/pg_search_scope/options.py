"""Search options and the resolver that merges per-call overrides over defaults.

Options mirror the keyword arguments accepted when a search scope is declared:

  as             - scope name, also used for the `<name>_rank` column alias
  wildcard       - "all" (True), "none" (False) or "last": which terms get `:*`
  operator       - "and" / "or": how terms are combined in the tsquery
  normalization  - ts_rank normalization bitmask, passed through untouched
  select_rank    - project the rank as `<scope name>_rank`
  language       - text search configuration, e.g. "simple" or "english"
  rank_function  - "ts_rank" or "ts_rank_cd"
  rank_columns   - rank by these columns instead of the searched ones
"""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pg_search_scope.ast import ColumnRef, Operator, RankFunction, Wildcard
from pg_search_scope.errors import InvalidOptionError

LANGUAGE_PATTERN = r"^[A-Za-z_][A-Za-z0-9_.]*$"

# Options that may be explicitly overridden with None
NULLABLE_OPTIONS = frozenset({"scope_name", "rank_columns"})

WILDCARD_ALIASES = {
    "last_only": Wildcard.LAST,
    "lastonly": Wildcard.LAST,
    "true": Wildcard.ALL,
    "false": Wildcard.NONE,
}

RANK_FUNCTION_ALIASES = {
    "tsrank": RankFunction.TS_RANK,
    "tsrankcoverdensity": RankFunction.TS_RANK_CD,
}


class _OptionsBase(BaseModel):
    """Validation shared by full and partial options."""

    @field_validator("wildcard", mode="before", check_fields=False)
    @classmethod
    def _coerce_wildcard(cls, value: Any) -> Any:
        if value is True:
            return Wildcard.ALL
        if value is False or value is None:
            return Wildcard.NONE
        if isinstance(value, str):
            value = value.strip().lower()
            return WILDCARD_ALIASES.get(value, value)
        return value

    @field_validator("operator", mode="before", check_fields=False)
    @classmethod
    def _coerce_operator(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("rank_function", mode="before", check_fields=False)
    @classmethod
    def _coerce_rank_function(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            return RANK_FUNCTION_ALIASES.get(value, value)
        return value

    @field_validator("normalization", mode="before", check_fields=False)
    @classmethod
    def _reject_bool_normalization(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("normalization must be an integer bitmask, not a boolean")
        return value

    @field_validator("rank_columns", mode="before", check_fields=False)
    @classmethod
    def _coerce_rank_columns(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (str, ColumnRef)):
            value = [value]
        if not isinstance(value, Iterable):
            raise ValueError("rank_columns must be a collection of column names")
        try:
            columns = tuple(ColumnRef.coerce(column) for column in value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc
        # An empty collection means "rank by the searched columns"
        return columns or None


class SearchOptions(_OptionsBase):
    """Fully resolved search options."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    scope_name: str | None = Field(default=None, alias="as", description="Scope name")
    wildcard: Wildcard = Field(default=Wildcard.ALL, description="Prefix matching policy")
    operator: Operator = Field(default=Operator.AND, description="Term combining operator")
    normalization: int = Field(default=0, ge=0, description="Rank normalization bitmask")
    select_rank: bool = Field(default=False, description="Project the rank value")
    language: str = Field(
        default="simple", pattern=LANGUAGE_PATTERN, description="Text search configuration"
    )
    rank_function: RankFunction = Field(default=RankFunction.TS_RANK, description="Rank function")
    rank_columns: tuple[ColumnRef, ...] | None = Field(
        default=None, description="Columns used for ranking instead of the searched columns"
    )


class SearchOptionsOverride(_OptionsBase):
    """Partial options; only fields that were explicitly set override defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    scope_name: str | None = Field(default=None, alias="as")
    wildcard: Wildcard | None = None
    operator: Operator | None = None
    normalization: int | None = Field(default=None, ge=0)
    select_rank: bool | None = None
    language: str | None = Field(default=None, pattern=LANGUAGE_PATTERN)
    rank_function: RankFunction | None = None
    rank_columns: tuple[ColumnRef, ...] | None = None


DEFAULT_OPTIONS = SearchOptions()


def _invalid_option(exc: ValidationError) -> InvalidOptionError:
    error = exc.errors()[0]
    loc = error.get("loc") or ("options",)
    return InvalidOptionError(str(loc[0]), error.get("input"), error.get("msg"))


def parse_overrides(
    overrides: SearchOptionsOverride | Mapping[str, Any] | None,
) -> SearchOptionsOverride:
    """Validate raw overrides, raising InvalidOptionError on the first bad option."""
    if overrides is None:
        return SearchOptionsOverride()
    if isinstance(overrides, SearchOptionsOverride):
        return overrides
    try:
        return SearchOptionsOverride.model_validate(dict(overrides))
    except ValidationError as exc:
        raise _invalid_option(exc) from exc


def resolve_options(
    defaults: SearchOptions,
    overrides: SearchOptionsOverride | Mapping[str, Any] | None = None,
) -> SearchOptions:
    """Merge overrides over defaults, field by field.

    Args:
        defaults: Options declared for the scope
        overrides: Per-call options; absent fields keep their default

    Returns:
        The resolved options. With no overrides this is `defaults` itself.

    Raises:
        InvalidOptionError: If an override is unknown, malformed, or not one
            of the recognized values (e.g. operator="xor")
    """
    override = parse_overrides(overrides)
    updates = {name: getattr(override, name) for name in override.model_fields_set}
    if not updates:
        return defaults

    for name, value in updates.items():
        if value is None and name not in NULLABLE_OPTIONS:
            raise InvalidOptionError(name, value, "option cannot be null")

    logger.debug(f"resolved search options with overrides: {sorted(updates)}")
    return defaults.model_copy(update=updates)
