"""Abstract base class for sysfs device classes.

A device class is a directory under ``<root>/class/`` (``block``, ``net``,
``scsi_host``, ...). Each entry in that directory is one device, and each
small file below the entry is one attribute. ``SysClass`` binds a Python
object to one entry and provides typed, fallible readers over its files.

Instances are immutable path handles:
- Nothing is cached; every attribute read goes to the filesystem.
- Equality, hashing and ordering use the path only.
- Public constructors validate the path. ``_from_path_unchecked`` exists
  for enumeration and hierarchy code that already proved the path valid.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from functools import total_ordering
from pathlib import Path
from typing import Any, TypeVar

from sysclass.backends.sysfs import SysfsAccessor, default_sysfs
from sysclass.errors import AttributeParseError, DeviceNotFoundError
from sysclass.utils.logger import Logger

T = TypeVar("T")
S = TypeVar("S", bound="SysClass")


@total_ordering
class SysClass(ABC):
    """A device directory under ``<root>/class/<class_name>/``."""

    __slots__ = ("_path", "_sysfs")

    def __init__(self, path: Path, sysfs: SysfsAccessor) -> None:
        # Internal: use from_name/from_path/all instead.
        self._path = path
        self._sysfs = sysfs

    @classmethod
    @abstractmethod
    def class_name(cls) -> str:
        """Return the sysfs class directory name (e.g. 'block')."""
        pass

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def _from_path_unchecked(cls: type[S], path: Path, sysfs: SysfsAccessor) -> S:
        """Wrap a path that enumeration or derivation has already validated."""
        return cls(path, sysfs)

    @classmethod
    def class_dir(cls, sysfs: SysfsAccessor | None = None) -> Path:
        """Return the directory that holds every instance of this class."""
        sysfs = sysfs or default_sysfs()
        return sysfs.class_dir(cls.class_name())

    @classmethod
    def iter_all(cls: type[S], sysfs: SysfsAccessor | None = None) -> Iterator[S]:
        """Lazily yield every instance of this class in listing order.

        Raises:
            OSError: If the class directory cannot be listed.
        """
        sysfs = sysfs or default_sysfs()
        class_dir = sysfs.class_dir(cls.class_name())
        for path in sysfs.iter_dir(class_dir):
            yield cls._from_path_unchecked(path, sysfs)

    @classmethod
    def all(cls: type[S], sysfs: SysfsAccessor | None = None) -> list[S]:
        """Return every instance of this class, sorted by path.

        Args:
            sysfs: Accessor to read through (defaults to the configured root)

        Returns:
            One instance per entry of the class directory

        Raises:
            OSError: If the class directory cannot be listed (missing,
                permission denied, class unsupported on this kernel)
        """
        sysfs = sysfs or default_sysfs()
        class_dir = sysfs.class_dir(cls.class_name())
        instances = sorted(
            cls._from_path_unchecked(class_dir / name, sysfs)
            for name in sysfs.list_dir(class_dir)
        )
        Logger.debug(
            cls.class_name(), f"Enumerated {len(instances)} entries in {class_dir}"
        )
        return instances

    @classmethod
    def from_name(cls: type[S], name: str, sysfs: SysfsAccessor | None = None) -> S:
        """Look up a single instance by its entry name.

        Raises:
            DeviceNotFoundError: If ``<class_dir>/<name>`` is not a directory
        """
        sysfs = sysfs or default_sysfs()
        path = sysfs.class_dir(cls.class_name()) / name
        if "/" in name or name in ("", ".", "..") or not sysfs.is_dir(path):
            Logger.debug(cls.class_name(), f"Lookup failed for {path}")
            raise DeviceNotFoundError(path)
        return cls._from_path_unchecked(path, sysfs)

    @classmethod
    def from_path(
        cls: type[S], path: str | Path, sysfs: SysfsAccessor | None = None
    ) -> S:
        """Build an instance from an absolute path inside the class directory.

        Raises:
            DeviceNotFoundError: If the path is not an existing directory
                directly under this class's directory
        """
        sysfs = sysfs or default_sysfs()
        path = Path(path)
        if path.parent != sysfs.class_dir(cls.class_name()):
            raise DeviceNotFoundError(path)
        return cls.from_name(path.name, sysfs)

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def path(self) -> Path:
        """Return the instance's sysfs directory."""
        return self._path

    @property
    def name(self) -> str:
        """Return the entry name (e.g. 'sda1')."""
        return self._path.name

    @property
    def sysfs(self) -> SysfsAccessor:
        """Return the accessor this instance reads through."""
        return self._sysfs

    def __eq__(self, other: object) -> bool:
        """Compare by class and path."""
        if not isinstance(other, SysClass) or type(other) is not type(self):
            return NotImplemented
        return self._path == other._path

    def __lt__(self, other: object) -> bool:
        """Order by path."""
        if not isinstance(other, SysClass) or type(other) is not type(self):
            return NotImplemented
        return str(self._path) < str(other._path)

    def __hash__(self) -> int:
        """Hash by class and path."""
        return hash((type(self).__name__, self._path))

    def __repr__(self) -> str:
        """Return a string representation of the instance."""
        return f"{type(self).__name__}(path='{self._path}')"

    # -------------------------------------------------------------------------
    # Attribute readers
    # -------------------------------------------------------------------------

    def has(self, relative: str) -> bool:
        """Check whether an attribute or subdirectory exists."""
        return self._sysfs.exists(self._path / relative)

    def read_file(self, relative: str) -> str:
        """Read an attribute as text with trailing whitespace stripped.

        Raises:
            FileNotFoundError: If the device does not expose the attribute
            PermissionError: If the attribute is not readable
            OSError: For any other read failure
        """
        return self._sysfs.read_text(self._path / relative).rstrip()

    def parse_file(self, relative: str, as_type: Callable[[str], T] = int) -> T:
        """Read an attribute and convert it with ``as_type``.

        Raises:
            OSError: If the read fails (see read_file)
            AttributeParseError: If the text does not convert
        """
        value = self.read_file(relative)
        try:
            return as_type(value)
        except (ValueError, TypeError) as e:
            raise AttributeParseError(self._path / relative, value, as_type) from e


def sysfs_attribute(
    relative: str,
    as_type: Callable[[str], Any] | None = None,
    doc: str | None = None,
) -> Callable[[SysClass], Any]:
    """Build a zero-argument attribute method for a SysClass subclass.

    Each call of the generated method performs one fresh read: ``read_file``
    when ``as_type`` is None, else ``parse_file`` with ``as_type``. The method
    is named after the attribute path (``"md/level"`` becomes ``md_level``).

    Example:
        >>> class Block(SysClass):
        ...     size = sysfs_attribute("size", int)
        >>> Block.from_name("sda").size()
        1953525168
    """
    if as_type is None:

        def method(self: SysClass) -> Any:
            return self.read_file(relative)

    else:
        converter = as_type

        def method(self: SysClass) -> Any:
            return self.parse_file(relative, converter)

    method.__name__ = method.__qualname__ = relative.replace("/", "_")
    method.__doc__ = doc or f"Read the '{relative}' attribute."
    method.sysfs_path = relative  # type: ignore[attr-defined]
    return method
