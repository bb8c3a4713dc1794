"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .logging import LOG_LEVEL_ENV_VAR, configure_logging, resolve_log_level
from .reconcile import (
    DEFAULT_SOURCE_NAME,
    ReconcileConfig,
    get_reconcile_config,
    require_local_root,
)
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_storage_config,
    sqlite_uri,
)

__all__ = [
    "DEFAULT_SOURCE_NAME",
    "LOG_LEVEL_ENV_VAR",
    "ConfigurationError",
    "DatabaseConfig",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ReconcileConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_reconcile_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
    "require_local_root",
    "resolve_log_level",
    "sqlite_uri",
]
