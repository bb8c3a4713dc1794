"""Root logger setup for the command line."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import InvalidConfigurationError

LOG_LEVEL_ENV_VAR = "ASSETDIFF_LOG_LEVEL"


def resolve_log_level(value: str | None = None) -> int:
    """Translate a level name such as ``"debug"`` into a ``logging`` level.

    Falls back to ``ASSETDIFF_LOG_LEVEL`` and then INFO when ``value`` is unset.
    """

    name = value or optional_env_var(LOG_LEVEL_ENV_VAR)
    if name is None:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(name.strip().upper())
    if level is None:
        raise InvalidConfigurationError(f"Unknown log level: {name!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with a terse CLI format.

    ``level`` defaults to :func:`resolve_log_level`. Pass ``force=True`` to
    reconfigure during tests.
    """

    logging.basicConfig(
        level=resolve_log_level() if level is None else level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
