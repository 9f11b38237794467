"""SCSI peripheral device type codes.

The ``device/type`` attribute of a SCSI-backed block device holds the
peripheral device type byte from the INQUIRY data, in decimal. The named
codes are the ones the Linux kernel defines (``TYPE_*`` in scsi_proto.h);
every other byte, including vendor-specific and reserved codes, decodes to
``UnknownScsiType`` so that decoding and encoding stay lossless.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from sysclass.errors import AttributeParseError


class ScsiType(IntEnum):
    """Named SCSI peripheral device types."""

    DISK = 0x00  # Direct-access block device
    TAPE = 0x01  # Sequential-access device
    PRINTER = 0x02
    PROCESSOR = 0x03  # HP scanners use this
    WORM = 0x04  # Write-once read-multiple
    ROM = 0x05  # CD/DVD
    SCANNER = 0x06
    MOD = 0x07  # Magneto-optical disk
    MEDIUM_CHANGER = 0x08  # Jukebox / autoloader
    COMM = 0x09  # Communications device
    RAID = 0x0C  # Storage array controller
    ENCLOSURE = 0x0D  # Enclosure services device
    RBC = 0x0E  # Simplified direct-access device
    OSD = 0x11  # Object-based storage
    ZBC = 0x14  # Host-managed zoned block device
    WLUN = 0x1E  # Well-known logical unit
    NO_LUN = 0x7F  # No device at this LUN


@dataclass(frozen=True)
class UnknownScsiType:
    """A peripheral device type byte with no named code."""

    code: int

    def __int__(self) -> int:
        """Return the raw byte."""
        return self.code

    def __str__(self) -> str:
        """Return a readable form including the raw code."""
        return f"unknown(0x{self.code:02x})"


ScsiDeviceType = ScsiType | UnknownScsiType

_LABELS: dict[ScsiType, str] = {
    ScsiType.DISK: "Direct-access block device",
    ScsiType.TAPE: "Sequential-access device",
    ScsiType.PRINTER: "Printer",
    ScsiType.PROCESSOR: "Processor",
    ScsiType.WORM: "Write-once device",
    ScsiType.ROM: "CD/DVD device",
    ScsiType.SCANNER: "Scanner",
    ScsiType.MOD: "Optical memory device",
    ScsiType.MEDIUM_CHANGER: "Medium changer",
    ScsiType.COMM: "Communications device",
    ScsiType.RAID: "Storage array controller",
    ScsiType.ENCLOSURE: "Enclosure services device",
    ScsiType.RBC: "Simplified direct-access device",
    ScsiType.OSD: "Object-based storage device",
    ScsiType.ZBC: "Host-managed zoned block device",
    ScsiType.WLUN: "Well-known logical unit",
    ScsiType.NO_LUN: "No logical unit",
}


def scsi_type_from_byte(code: int) -> ScsiDeviceType:
    """Map a peripheral device type byte to its variant.

    Args:
        code: Raw byte (0-255)

    Returns:
        The named ScsiType for known codes, UnknownScsiType otherwise

    Raises:
        ValueError: If code is outside 0-255
    """
    if not 0 <= code <= 0xFF:
        raise ValueError(f"SCSI device type out of range: {code}")
    try:
        return ScsiType(code)
    except ValueError:
        return UnknownScsiType(code)


def scsi_type_from_str(text: str) -> ScsiDeviceType:
    """Decode the decimal text stored in a ``device/type`` attribute.

    Only unsigned decimal digits are accepted (surrounding whitespace is
    ignored), and the value must fit in a byte.

    Raises:
        AttributeParseError: On non-numeric or out-of-range text
    """
    digits = text.strip()
    if not digits.isascii() or not digits.isdigit() or int(digits) > 0xFF:
        raise AttributeParseError("device/type", text, scsi_type_from_str)
    return scsi_type_from_byte(int(digits))


def scsi_type_to_byte(value: ScsiDeviceType) -> int:
    """Return the raw byte for a decoded device type."""
    return int(value)


def scsi_type_label(value: ScsiDeviceType) -> str:
    """Return a human-readable description of a device type."""
    if isinstance(value, ScsiType):
        return _LABELS[value]
    return f"Unknown type 0x{value.code:02x}"
