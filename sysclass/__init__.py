"""sysclass - typed, read-only access to Linux sysfs block devices."""

from sysclass.backends.base import SysClass, sysfs_attribute
from sysclass.backends.block import Block, parse_scheduler
from sysclass.backends.scsi import (
    ScsiDeviceType,
    ScsiType,
    UnknownScsiType,
    scsi_type_from_byte,
    scsi_type_from_str,
    scsi_type_label,
    scsi_type_to_byte,
)
from sysclass.backends.sysfs import SysfsAccessor, default_sysfs
from sysclass.errors import AttributeParseError, DeviceNotFoundError, SysClassError
from sysclass.models import BlockDeviceType, BlockScheduler, BlockStat, DeviceKind
from sysclass.version import SYSCLASS_VERSION, Version

__version__ = str(SYSCLASS_VERSION)
__version_info__ = SYSCLASS_VERSION

__all__ = [
    "AttributeParseError",
    "Block",
    "BlockDeviceType",
    "BlockScheduler",
    "BlockStat",
    "DeviceKind",
    "DeviceNotFoundError",
    "SYSCLASS_VERSION",
    "ScsiDeviceType",
    "ScsiType",
    "SysClass",
    "SysClassError",
    "SysfsAccessor",
    "UnknownScsiType",
    "Version",
    "__version__",
    "__version_info__",
    "default_sysfs",
    "parse_scheduler",
    "scsi_type_from_byte",
    "scsi_type_from_str",
    "scsi_type_label",
    "scsi_type_to_byte",
    "sysfs_attribute",
]
