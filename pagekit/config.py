"""
Configuration for pagekit.

Two layers:
- Settings: environment-driven defaults (PAGEKIT_* variables or a .env file)
- PaginationConfig: the value handed to PageResolver/BatchWalker at
  construction time, carrying the bound store and rendering hooks

The facade functions in pagekit/__init__.py use a process-wide default
PaginationConfig, built from Settings at import and replaced through
configure(). The resolver and walker never look it up on their own.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, TYPE_CHECKING

from pydantic_settings import BaseSettings, SettingsConfigDict

from pagekit.exceptions import ConfigurationError

if TYPE_CHECKING:
    from pagekit.repositories.store import Store

DEFAULT_PER_PAGE = 30
DEFAULT_PER_GROUP = 1000

STORE_NOT_CONFIGURED = """You must configure a store for pagekit. For example:

    import pagekit
    from pagekit.repositories import SessionStore

    pagekit.configure(store=SessionStore(session))
"""


class Settings(BaseSettings):
    # Pagination
    PER_PAGE: int = DEFAULT_PER_PAGE
    PER_GROUP: int = DEFAULT_PER_GROUP

    model_config = SettingsConfigDict(
        env_prefix="PAGEKIT_", env_file=".env", case_sensitive=True, extra="ignore"
    )


@dataclass(frozen=True)
class PaginationConfig:
    """
    Explicit configuration value for the pagination core.

    Attributes:
        store: Storage collaborator used for counting and fetching rows
        per_page: Default page size when the request gives none (or an invalid one)
        per_group: Default batch size for BatchWalker
        translator: Callable used to translate navigation labels
        url_resolver: Callable (request, route_name, **params) -> str used to
            resolve named routes when building page links
    """

    store: Optional["Store"] = None
    per_page: int = DEFAULT_PER_PAGE
    per_group: int = DEFAULT_PER_GROUP
    translator: Optional[Callable[[str], str]] = None
    url_resolver: Optional[Callable[..., str]] = None

    @classmethod
    def from_settings(
        cls, app_settings: Optional[Settings] = None, **overrides: Any
    ) -> "PaginationConfig":
        """Build a config from environment settings, then apply overrides."""
        app_settings = app_settings or Settings()
        config = cls(per_page=app_settings.PER_PAGE, per_group=app_settings.PER_GROUP)
        return replace(config, **overrides) if overrides else config

    def require_store(self) -> "Store":
        """
        Return the bound store.

        Raises:
            ConfigurationError: If no store has been bound
        """
        if self.store is None:
            raise ConfigurationError(STORE_NOT_CONFIGURED)
        return self.store


_default_config: PaginationConfig = PaginationConfig.from_settings()


def configure(config: Optional[PaginationConfig] = None, **options: Any) -> PaginationConfig:
    """
    Install the default config used by the module-level helpers.

    Either pass a ready PaginationConfig or keyword options that are applied
    on top of the current default.

    Usage:
        pagekit.configure(store=SessionStore(session), per_page=50)
    """
    global _default_config
    if config is None:
        config = replace(_default_config, **options)
    elif options:
        config = replace(config, **options)
    _default_config = config
    return config


def get_config() -> PaginationConfig:
    return _default_config


def reset_config() -> None:
    """Rebuild the default config from the environment (mainly for tests)."""
    global _default_config
    _default_config = PaginationConfig.from_settings()
