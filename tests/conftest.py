"""Shared fixtures: a fake sysfs tree under tmp_path."""

import logging
from pathlib import Path

import pytest

from sysclass.backends.sysfs import SysfsAccessor
from sysclass.utils.logger import Logger


class FakeSysfs:
    """Builds ``<root>/class/block/<name>/`` entries with attribute files."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.accessor = SysfsAccessor(root)
        self.block_dir = self.accessor.class_dir("block")
        self.block_dir.mkdir(parents=True)

    def add_block(
        self,
        name: str,
        files: dict[str, str] | None = None,
        dirs: tuple[str, ...] = (),
    ) -> Path:
        """Create a block device entry and return its directory."""
        device_dir = self.block_dir / name
        device_dir.mkdir()
        for relative in dirs:
            (device_dir / relative).mkdir(parents=True, exist_ok=True)
        for relative, content in (files or {}).items():
            path = device_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return device_dir

    def link(self, name: str, relation: str, target: str) -> None:
        """Add ``<name>/<relation>/<target>`` (e.g. a slaves entry)."""
        relation_dir = self.block_dir / name / relation
        relation_dir.mkdir(exist_ok=True)
        (relation_dir / target).symlink_to(self.block_dir / target)


@pytest.fixture
def fake_sysfs(tmp_path):
    """Return an empty fake sysfs with a block class directory."""
    return FakeSysfs(tmp_path / "sys")


@pytest.fixture
def disk_tree(fake_sysfs):
    """A small system: two SATA disks, an NVMe disk, dm and md devices."""
    fake_sysfs.add_block(
        "sda",
        {
            "size": "1953525168\n",
            "ro": "0\n",
            "removable": "0\n",
            "dev": "8:0\n",
            "device/type": "0\n",
            "device/model": "Samsung SSD 870\n",
            "device/vendor": "ATA     \n",
            "queue/scheduler": "[mq-deadline] kyber bfq none\n",
        },
        dirs=("holders",),
    )
    fake_sysfs.add_block("sda1", {"partition": "1\n", "size": "1048576\n"})
    fake_sysfs.add_block("sda2", {"partition": "2\n", "size": "2097152\n"})
    fake_sysfs.add_block("sda12", {"partition": "12\n", "size": "4096\n"})
    fake_sysfs.add_block("sdb", {"size": "0\n", "device/type": "5\n"})
    fake_sysfs.add_block(
        "nvme0n1",
        {"size": "976773168\n", "queue/scheduler": "[none] mq-deadline\n"},
        dirs=("device",),
    )
    fake_sysfs.add_block("nvme0n1p1", {"partition": "1\n"})
    fake_sysfs.add_block(
        "dm-0", {"size": "2097152\n", "dm/name": "vg0-root\n"}, dirs=("slaves",)
    )
    fake_sysfs.add_block("md0", {"md/level": "raid1\n"}, dirs=("slaves",))
    fake_sysfs.add_block("loop0", {"size": "0\n"})
    fake_sysfs.link("dm-0", "slaves", "sda2")
    fake_sysfs.link("sda2", "holders", "dm-0")
    fake_sysfs.link("md0", "slaves", "sda1")
    fake_sysfs.link("md0", "slaves", "sda12")
    return fake_sysfs


@pytest.fixture(autouse=True)
def reset_logger():
    """Leave the process-wide logger unconfigured between tests."""
    yield
    logger = logging.getLogger("sysclass")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    Logger._configured = False
