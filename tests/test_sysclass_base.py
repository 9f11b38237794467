"""Tests for the SysClass base: enumeration, lookup and attribute reads."""

import os

import pytest

from sysclass.backends.base import SysClass, sysfs_attribute
from sysclass.backends.block import Block
from sysclass.errors import AttributeParseError, DeviceNotFoundError


class Net(SysClass):
    """A second class, to check the base is not block-specific."""

    mtu = sysfs_attribute("mtu", int)
    operstate = sysfs_attribute("operstate")

    @classmethod
    def class_name(cls) -> str:
        return "net"


def test_all_enumerates_sorted(disk_tree):
    """Test all() returns one instance per entry, sorted by path."""
    names = [block.name for block in Block.all(disk_tree.accessor)]
    assert names == sorted(names)
    assert set(names) == {
        "dm-0",
        "loop0",
        "md0",
        "nvme0n1",
        "nvme0n1p1",
        "sda",
        "sda1",
        "sda12",
        "sda2",
        "sdb",
    }


def test_iter_all_is_lazy(disk_tree):
    """Test iter_all yields the same devices as all()."""
    assert sorted(Block.iter_all(disk_tree.accessor)) == Block.all(disk_tree.accessor)


def test_all_missing_class_raises(tmp_path):
    """Test enumerating a class the kernel does not provide fails with OSError."""
    from sysclass.backends.sysfs import SysfsAccessor

    with pytest.raises(FileNotFoundError):
        Block.all(SysfsAccessor(tmp_path))


@pytest.mark.skipif(os.geteuid() == 0, reason="root ignores directory permissions")
def test_all_permission_denied(fake_sysfs):
    """Test an unreadable class directory raises PermissionError."""
    fake_sysfs.block_dir.chmod(0o000)
    try:
        with pytest.raises(PermissionError):
            Block.all(fake_sysfs.accessor)
    finally:
        fake_sysfs.block_dir.chmod(0o755)


def test_from_name(disk_tree):
    """Test validated lookup by name."""
    sda = Block.from_name("sda", disk_tree.accessor)
    assert sda.path == disk_tree.block_dir / "sda"
    assert sda.name == "sda"
    assert sda.sysfs is disk_tree.accessor


@pytest.mark.parametrize("name", ["sdz", "", "..", "sda/queue"])
def test_from_name_not_found(disk_tree, name):
    """Test lookups of missing or malformed names raise DeviceNotFoundError."""
    with pytest.raises(DeviceNotFoundError) as excinfo:
        Block.from_name(name, disk_tree.accessor)
    assert isinstance(excinfo.value, FileNotFoundError)


def test_from_path(disk_tree):
    """Test validated construction from an absolute path."""
    path = disk_tree.block_dir / "sda1"
    assert Block.from_path(path, disk_tree.accessor).name == "sda1"

    with pytest.raises(DeviceNotFoundError):
        Block.from_path(disk_tree.block_dir / "sda" / "queue", disk_tree.accessor)
    with pytest.raises(DeviceNotFoundError):
        Block.from_path(disk_tree.block_dir / "nope", disk_tree.accessor)


def test_equality_and_ordering(disk_tree):
    """Test instances compare, hash and sort by path."""
    a = Block.from_name("sda", disk_tree.accessor)
    b = Block.from_name("sda", disk_tree.accessor)
    c = Block.from_name("sdb", disk_tree.accessor)

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert a < c
    assert sorted([c, a]) == [a, c]
    assert "sda" in repr(a)


def test_read_file_strips_trailing_whitespace(disk_tree):
    """Test text attributes come back without the trailing newline."""
    sda = Block.from_name("sda", disk_tree.accessor)
    assert sda.read_file("device/vendor") == "ATA"
    assert sda.read_file("dev") == "8:0"


def test_parse_file(disk_tree):
    """Test typed parsing of attribute text."""
    sda = Block.from_name("sda", disk_tree.accessor)
    assert sda.parse_file("size") == 1953525168
    assert sda.parse_file("ro", float) == 0.0


def test_parse_file_errors(disk_tree):
    """Test missing attributes and bad text raise the right kinds."""
    sda = Block.from_name("sda", disk_tree.accessor)
    with pytest.raises(FileNotFoundError):
        sda.parse_file("md/raid_disks")

    with pytest.raises(AttributeParseError) as excinfo:
        sda.parse_file("device/model")
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.value == "Samsung SSD 870"
    assert excinfo.value.path == disk_tree.block_dir / "sda" / "device" / "model"


def test_sysfs_attribute_binding(fake_sysfs):
    """Test declared attributes read fresh values on every call."""
    net_dir = fake_sysfs.root / "class" / "net" / "eth0"
    net_dir.mkdir(parents=True)
    (net_dir / "mtu").write_text("1500\n")
    (net_dir / "operstate").write_text("up\n")

    eth0 = Net.from_name("eth0", fake_sysfs.accessor)
    assert eth0.mtu() == 1500
    assert eth0.operstate() == "up"

    (net_dir / "mtu").write_text("9000\n")
    assert eth0.mtu() == 9000
    assert Net.mtu.sysfs_path == "mtu"


def test_instances_of_different_classes_differ(fake_sysfs):
    """Test a Net and a Block never compare equal."""
    fake_sysfs.add_block("sda")
    net_dir = fake_sysfs.root / "class" / "net" / "sda"
    net_dir.mkdir(parents=True)

    assert Block.from_name("sda", fake_sysfs.accessor) != Net.from_name(
        "sda", fake_sysfs.accessor
    )
