"""Read-only access to the sysfs pseudo-filesystem.

Everything sysclass knows about devices comes through a ``SysfsAccessor``:
directory listings, existence checks and whole-file reads under one root
directory (``/sys`` on a live system, a fake tree in tests).
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from sysclass.utils.env import sysfs_root


class SysfsAccessor:
    """Filesystem capability bound to a sysfs root directory.

    All methods raise the ``OSError`` subclass of the underlying failure
    (``FileNotFoundError``, ``PermissionError``, ...) rather than returning
    sentinels.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root is not None else Path(sysfs_root())

    def __repr__(self) -> str:
        """Return a string representation of the accessor."""
        return f"SysfsAccessor(root='{self.root}')"

    def class_dir(self, class_name: str) -> Path:
        """Return ``<root>/class/<class_name>``."""
        return self.root / "class" / class_name

    def list_dir(self, path: Path) -> list[str]:
        """Return the entry names under a directory."""
        return os.listdir(path)

    def iter_dir(self, path: Path) -> Iterator[Path]:
        """Return a lazy, single-pass iterator over a directory's entries.

        The directory is opened before returning, so a listing failure raises
        here; errors while advancing raise from ``next()``.
        """
        scanner = os.scandir(path)
        return self._entries(scanner, path)

    @staticmethod
    def _entries(scanner, path: Path) -> Iterator[Path]:
        with scanner:
            for entry in scanner:
                yield path / entry.name

    def exists(self, path: Path) -> bool:
        """Check whether a path exists."""
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        """Check whether a path is a directory (symlinks followed)."""
        return path.is_dir()

    def read_text(self, path: Path) -> str:
        """Read a whole attribute file."""
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read()


_default: SysfsAccessor | None = None


def default_sysfs() -> SysfsAccessor:
    """Return the accessor for the configured root.

    The root comes from ``SYSCLASS_SYSFS_ROOT`` (default ``/sys``). The
    accessor is rebuilt when the variable changes between calls.
    """
    global _default
    root = Path(sysfs_root())
    if _default is None or _default.root != root:
        _default = SysfsAccessor(root)
    return _default
