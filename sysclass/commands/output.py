"""Rendering helpers shared by the CLI commands."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import yaml
from pydantic import BaseModel

from sysclass.errors import AttributeParseError
from sysclass.models.constants import OutputFormat
from sysclass.utils.logger import Logger


def read_optional(read: Callable[[], Any], default: Any = None) -> Any:
    """Call an attribute reader, mapping absence or bad text to a default.

    Most attributes exist only for some device types, so the CLI reports
    them as missing instead of failing.
    """
    try:
        return read()
    except (OSError, AttributeParseError) as e:
        Logger.debug("cli", f"{getattr(read, '__name__', read)}: {e}")
        return default


def read_flag(read: Callable[[], int]) -> bool | None:
    """Read a 0/1 attribute as a bool, or None if unavailable."""
    value = read_optional(read)
    return None if value is None else bool(value)


def render(model: BaseModel, fmt: OutputFormat) -> str:
    """Serialize a model as JSON or YAML.

    Args:
        model: Pydantic model to serialize
        fmt: OutputFormat.JSON or OutputFormat.YAML

    Raises:
        ValueError: For OutputFormat.TEXT, which each command renders itself
    """
    data = model.model_dump(mode="json")
    if fmt == OutputFormat.JSON:
        return json.dumps(data, indent=2)
    if fmt == OutputFormat.YAML:
        result: str = yaml.safe_dump(data, indent=2, default_flow_style=False)
        return result.rstrip("\n")
    raise ValueError(f"Unsupported structured format: {fmt}")


def format_bytes(value: int | None) -> str:
    """Format a byte count with binary units (e.g. '465.8 GiB')."""
    if value is None:
        return "-"
    size = float(value)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TiB"
