"""Constants for sysclass models and commands."""

import sys

if sys.version_info >= (3, 11):  # noqa: UP036
    from enum import StrEnum
else:
    from backports.strenum import StrEnum  # noqa: UP035


class DeviceKind(StrEnum):
    """Underlying technology of a block device."""

    DEVICE_MAPPER = "device_mapper"
    STORAGE_DEVICE = "storage_device"
    NVME = "nvme"
    LOOP = "loop"
    MULTIPLE_DEVICE = "multiple_device"  # Software RAID (md)
    PARTITION = "partition"
    RAM_DISK = "ram_disk"
    COMPRESSED_RAM_DISK = "compressed_ram_disk"
    SCSI = "scsi"
    UNKNOWN = "unknown"


class OutputFormat(StrEnum):
    """CLI output formats."""

    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


# Name prefixes checked by Block.device_type(), in precedence order. The
# character right after the prefix must be an ASCII digit.
NUMBERED_NAME_PREFIXES: tuple[tuple[str, DeviceKind], ...] = (
    ("dm-", DeviceKind.DEVICE_MAPPER),
    ("loop", DeviceKind.LOOP),
    ("md", DeviceKind.MULTIPLE_DEVICE),
    ("nvme", DeviceKind.NVME),
    ("ram", DeviceKind.RAM_DISK),
    ("zram", DeviceKind.COMPRESSED_RAM_DISK),
)

# SCSI disks: "sd" followed by an ASCII letter (sda, sdb, ..., sdaa)
SCSI_DISK_PREFIX = "sd"

# The "size" attribute always counts 512-byte sectors
SECTOR_SIZE = 512
