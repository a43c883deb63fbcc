"""Configuration for pg_search_scope, read from PG_SEARCH_* environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pg_search_scope.options import DEFAULT_OPTIONS, SearchOptions, resolve_options


class SearchScopeConfig(BaseSettings):
    """Default search options and logging settings.

    Option values are kept as raw strings/ints here and validated by
    `default_options()`, so a bad environment value raises InvalidOptionError
    naming the option.
    """

    model_config = SettingsConfigDict(
        env_prefix="PG_SEARCH_",
        extra="ignore",
    )

    wildcard: str = Field(default="all", description="Default wildcard policy: all, none or last")
    operator: str = Field(default="and", description="Default boolean operator: and or or")
    normalization: int = Field(default=0, description="Default rank normalization bitmask")
    select_rank: bool = Field(default=False, description="Project the rank column by default")
    language: str = Field(default="simple", description="Default text search configuration")
    rank_function: str = Field(default="ts_rank", description="Default rank function")
    log_level: str = Field(default="INFO", description="Log level for the CLI")

    def default_options(self, base: SearchOptions = DEFAULT_OPTIONS) -> SearchOptions:
        """Search options built from this configuration."""
        return resolve_options(
            base,
            {
                "wildcard": self.wildcard,
                "operator": self.operator,
                "normalization": self.normalization,
                "select_rank": self.select_rank,
                "language": self.language,
                "rank_function": self.rank_function,
            },
        )
