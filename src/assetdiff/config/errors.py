"""Errors raised while resolving settings from the environment."""

from __future__ import annotations

from assetdiff.domain.errors import AssetDiffError


class ConfigurationError(AssetDiffError, RuntimeError):
    """Raised before any catalog access when settings are unusable."""


class MissingConfigurationError(ConfigurationError):
    """A required setting (environment variable or CLI flag) is absent or blank."""


class InvalidConfigurationError(ConfigurationError):
    """A setting is present but cannot be interpreted."""
