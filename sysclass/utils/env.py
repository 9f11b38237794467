"""Environment variable helpers with logging.

Usage:
    from sysclass.utils.env import get_env

    root = get_env("SYSCLASS_SYSFS_ROOT", default="/sys", log=True)
"""

from __future__ import annotations

import os
from typing import TypeVar, overload

T = TypeVar("T")

SYSFS_ROOT_VAR = "SYSCLASS_SYSFS_ROOT"
LOG_LEVEL_VAR = "SYSCLASS_LOG_LEVEL"

DEFAULT_SYSFS_ROOT = "/sys"
DEFAULT_LOG_LEVEL = "WARNING"


def _log_access(name: str, value: str | None) -> None:
    """Log an environment variable read if the logger is configured."""
    from sysclass.utils.logger import Logger

    if not Logger.is_configured():
        return
    Logger.get("env").debug(f"ENV GET {name}={value}")


@overload
def get_env(name: str, *, default: T, log: bool = ...) -> str | T:
    ...


@overload
def get_env(name: str, *, log: bool = ...) -> str | None:
    ...


def get_env(
    name: str,
    *,
    default: T | None = None,
    log: bool = False,
) -> str | T | None:
    """Get an environment variable.

    Args:
        name: Environment variable name.
        default: Returned when the variable is not set.
        log: If True, log the access (uses Logger if configured).

    Returns:
        The value, or default if not set.

    Examples:
        >>> get_env("SYSCLASS_SYSFS_ROOT", default="/sys")
        '/sys'
    """
    value = os.environ.get(name)

    if log:
        _log_access(name, value)

    if value is None:
        return default

    return value


def sysfs_root() -> str:
    """Return the configured pseudo-filesystem root."""
    root = get_env(SYSFS_ROOT_VAR, default=DEFAULT_SYSFS_ROOT, log=True)
    return root or DEFAULT_SYSFS_ROOT


def log_level() -> str:
    """Return the configured CLI log level."""
    return get_env(LOG_LEVEL_VAR, default=DEFAULT_LOG_LEVEL)
