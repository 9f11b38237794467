"""Exceptions raised while reading sysfs device classes.

I/O failures are not wrapped: ``FileNotFoundError``, ``PermissionError`` and
other ``OSError`` subclasses propagate from the accessor unchanged, so callers
can treat an attribute the current device does not support as an ordinary
``FileNotFoundError``.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any


class SysClassError(Exception):
    """Base exception for sysclass errors."""

    pass


class DeviceNotFoundError(SysClassError, FileNotFoundError):
    """Raised when a validated lookup names a device that does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"No such sysfs device: {self.path}")


class AttributeParseError(SysClassError, ValueError):
    """Raised when attribute text does not match the expected type."""

    def __init__(
        self, path: str | Path, value: str, expected_type: Callable[..., Any]
    ) -> None:
        self.path = Path(path)
        self.value = value
        self.expected_type = expected_type
        type_name = getattr(expected_type, "__name__", repr(expected_type))
        super().__init__(f"Cannot parse {self.path}='{value}' as {type_name}")
