"""Models for block device attributes and CLI output."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sysclass.backends.scsi import ScsiDeviceType, scsi_type_label
from sysclass.models.constants import DeviceKind


@dataclass(frozen=True)
class BlockDeviceType:
    """Classification of a block device.

    ``scsi_type`` is set only when ``kind`` is ``DeviceKind.SCSI``.
    """

    kind: DeviceKind
    scsi_type: ScsiDeviceType | None = None

    def __str__(self) -> str:
        """Return e.g. 'nvme' or 'scsi(ROM)'."""
        if self.kind == DeviceKind.SCSI and self.scsi_type is not None:
            return f"{self.kind}({_scsi_name(self.scsi_type)})"
        return str(self.kind)

    @property
    def label(self) -> str:
        """Return a human-readable label."""
        if self.kind == DeviceKind.SCSI and self.scsi_type is not None:
            return f"SCSI {scsi_type_label(self.scsi_type)}"
        return self.kind.value.replace("_", " ").title()


def _scsi_name(value: ScsiDeviceType) -> str:
    name = getattr(value, "name", None)
    return name if isinstance(name, str) else str(value)


class BlockScheduler(BaseModel):
    """I/O schedulers offered by a queue, and which one is active.

    When the attribute marks no scheduler with brackets, ``active`` stays 0:
    the first scheduler is reported even though the kernel did not mark it.
    """

    model_config = ConfigDict(frozen=True)

    schedulers: list[str] = Field(..., description="Scheduler names in file order")
    active: int = Field(0, description="Index of the active scheduler", ge=0)

    @model_validator(mode="after")
    def _check_active(self) -> BlockScheduler:
        if self.schedulers and self.active >= len(self.schedulers):
            raise ValueError(
                f"active index {self.active} out of range for "
                f"{len(self.schedulers)} schedulers"
            )
        return self

    def active_name(self) -> str:
        """Return the name of the active scheduler.

        Raises:
            IndexError: If the attribute listed no schedulers at all
        """
        return self.schedulers[self.active]


class BlockStat(BaseModel):
    """Counters from a block device's ``stat`` attribute.

    Ticks are in milliseconds, sectors are 512 bytes. Discard fields appear
    on kernels >= 4.18 and flush fields on kernels >= 5.5.
    """

    model_config = ConfigDict(frozen=True)

    read_ios: int = Field(..., description="Read requests completed")
    read_merges: int = Field(..., description="Read requests merged")
    read_sectors: int = Field(..., description="Sectors read")
    read_ticks: int = Field(..., description="Time spent reading (ms)")
    write_ios: int = Field(..., description="Write requests completed")
    write_merges: int = Field(..., description="Write requests merged")
    write_sectors: int = Field(..., description="Sectors written")
    write_ticks: int = Field(..., description="Time spent writing (ms)")
    in_flight: int = Field(..., description="Requests currently in flight")
    io_ticks: int = Field(..., description="Time the device was busy (ms)")
    time_in_queue: int = Field(..., description="Weighted time in queue (ms)")
    discard_ios: int | None = Field(None, description="Discard requests completed")
    discard_merges: int | None = Field(None, description="Discard requests merged")
    discard_sectors: int | None = Field(None, description="Sectors discarded")
    discard_ticks: int | None = Field(None, description="Time spent discarding (ms)")
    flush_ios: int | None = Field(None, description="Flush requests completed")
    flush_ticks: int | None = Field(None, description="Time spent flushing (ms)")

    @classmethod
    def from_counters(cls, counters: list[int]) -> BlockStat:
        """Build from the integers of a stat line, in kernel order.

        Raises:
            ValueError: If fewer than the 11 base counters are present
        """
        if len(counters) < 11:
            raise ValueError(f"expected at least 11 counters, got {len(counters)}")
        names = list(cls.model_fields)
        return cls(**dict(zip(names, counters)))


# CLI output models


class BlockDeviceSummary(BaseModel):
    """One block device as reported by the CLI."""

    name: str = Field(..., description="Device name (e.g., sda1)")
    path: str = Field(..., description="sysfs directory")
    device_type: str = Field(..., description="Classification (e.g., nvme, partition)")
    size_bytes: int | None = Field(None, description="Capacity in bytes", ge=0)
    read_only: bool | None = Field(None, description="True if the device is read-only")
    removable: bool | None = Field(None, description="True if the media is removable")
    dev: str | None = Field(None, description="major:minor numbers")
    parent: str | None = Field(None, description="Parent disk for partitions")
    model: str | None = Field(None, description="device/model, if exposed")
    vendor: str | None = Field(None, description="device/vendor, if exposed")


class BlockDeviceDetail(BlockDeviceSummary):
    """A block device with its relations, for ``sysclass show``."""

    scheduler: BlockScheduler | None = Field(None, description="I/O schedulers")
    children: list[str] = Field(default_factory=list, description="Partitions")
    slaves: list[str] = Field(default_factory=list, description="Backing devices")
    holders: list[str] = Field(
        default_factory=list, description="Devices built on this one"
    )
    mount_points: list[str] = Field(
        default_factory=list, description="Active mount points"
    )


class BlockListOutput(BaseModel):
    """Output of ``sysclass list``."""

    sysfs_root: str = Field(..., description="Pseudo-filesystem root that was read")
    devices: list[BlockDeviceSummary] = Field(default_factory=list)
