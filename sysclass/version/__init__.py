"""Package version."""

from sysclass.version.sysclass_version import SYSCLASS_VERSION, Version

__all__ = ["SYSCLASS_VERSION", "Version"]
