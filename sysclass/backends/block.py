"""Block devices in ``/sys/class/block``.

Every disk, partition, loop device, device-mapper target and md array has an
entry in the block class. Besides the attribute readers, ``Block`` derives
the device hierarchy:

- ``parent_device``/``children``: whole disk <-> partition, computed from
  the partition number and the entry name.
- ``slaves``/``holders``: logical device <-> backing device, read from the
  ``slaves`` and ``holders`` subdirectories.

The two relations are independent. A caller that wants the full dependency
graph (e.g. dm-1 -> sda2 -> sda) has to combine them.
"""

from __future__ import annotations

import string
from collections.abc import Iterator
from pathlib import Path

from sysclass.backends.base import SysClass, sysfs_attribute
from sysclass.backends.scsi import ScsiDeviceType, scsi_type_from_str
from sysclass.errors import AttributeParseError
from sysclass.models.block_models import BlockDeviceType, BlockScheduler, BlockStat
from sysclass.models.constants import (
    NUMBERED_NAME_PREFIXES,
    SCSI_DISK_PREFIX,
    SECTOR_SIZE,
    DeviceKind,
)
from sysclass.utils.logger import Logger


def parse_scheduler(text: str) -> BlockScheduler:
    """Parse the ``queue/scheduler`` format.

    The kernel lists the available schedulers separated by whitespace and
    wraps the active one in brackets, e.g. ``"mq-deadline kyber [none]"``.

    Args:
        text: Raw attribute text

    Returns:
        BlockScheduler with names in file order. ``active`` is 0 when no
        name is bracketed.
    """
    active = 0
    schedulers: list[str] = []
    for token in text.split():
        if token.startswith("["):
            active = len(schedulers)
            token = token[1:-1]
        schedulers.append(token)
    return BlockScheduler(schedulers=schedulers, active=active)


def _parse_counters(text: str) -> list[int]:
    return [int(field) for field in text.split()]


def _byte(text: str) -> int:
    """Parse an unsigned decimal that fits in a byte (0-255)."""
    if not text.isascii() or not text.isdigit() or int(text) > 0xFF:
        raise ValueError(f"not an unsigned byte: {text!r}")
    return int(text)


def _hex(text: str) -> int:
    return int(text, 16)


def _has_char_after(name: str, prefix: str, chars: str) -> bool:
    """Check ``name`` starts with ``prefix`` followed by one of ``chars``."""
    pos = len(prefix)
    return name.startswith(prefix) and len(name) > pos and name[pos] in chars


class Block(SysClass):
    """A block device in /sys/class/block."""

    @classmethod
    def class_name(cls) -> str:
        """Return the sysfs class name."""
        return "block"

    # -------------------------------------------------------------------------
    # Hierarchy
    # -------------------------------------------------------------------------

    def has_device(self) -> bool:
        """Check for a ``device`` link (physical or SCSI device node).

        Purely logical devices (loop, dm, md, zram) have none.
        """
        return self.has("device")

    def parent_device(self) -> Block | None:
        """Return the whole disk a partition belongs to.

        The partition number decides how many trailing characters of the
        path are the partition suffix: one for partitions 1-9, two for 10-19,
        and so on (``partition // 10 + 1``). The path is cut there. This
        assumes the digits of the number are the tail of the entry name,
        which holds for ``sda1`` -> ``sda`` and ``sda12`` -> ``sda``. Names
        with a separator before the number keep it: ``nvme0n1p3`` ->
        ``nvme0n1p``. The derived path is not checked.

        Returns:
            The parent Block, or None if ``partition`` is missing or does not
            parse (the device is not a partition)
        """
        try:
            partition = self.partition()
        except (OSError, AttributeParseError):
            return None

        path = str(self.path)
        pos = len(path) - partition // 10 - 1
        return Block._from_path_unchecked(Path(path[:pos]), self.sysfs)

    def children(self) -> list[Block]:
        """Return the partitions of this device, sorted by path.

        Rescans the whole class on every call.

        Raises:
            OSError: If the class directory cannot be listed
        """
        children = [
            block
            for block in Block.all(self.sysfs)
            if (parent := block.parent_device()) is not None
            and parent.path == self.path
        ]
        children.sort()
        return children

    def slaves(self) -> Iterator[Path] | None:
        """Return the backing devices of a logical device.

        For example dm-4 has a slave dm-0, dm-0 has a slave sda3, and sda3
        has none.

        Returns:
            None if there is no ``slaves`` directory, else a lazy, single-pass
            iterator over its entries (empty when the directory is empty)

        Raises:
            OSError: If the ``slaves`` directory exists but cannot be listed.
                Errors reading individual entries raise during iteration.
        """
        return self._iter_subdir("slaves")

    def holders(self) -> Iterator[Path] | None:
        """Return the devices built on top of this one.

        The reverse of ``slaves``: sda3 is held by dm-0. Same return shape
        and errors as ``slaves``.
        """
        return self._iter_subdir("holders")

    def slave_devices(self) -> list[Block]:
        """Return the backing devices as Blocks, sorted by path."""
        return self._resolve(self.slaves())

    def holder_devices(self) -> list[Block]:
        """Return the holding devices as Blocks, sorted by path."""
        return self._resolve(self.holders())

    def _iter_subdir(self, relative: str) -> Iterator[Path] | None:
        subdir = self.path / relative
        if not self.sysfs.exists(subdir):
            return None
        return self.sysfs.iter_dir(subdir)

    def _resolve(self, entries: Iterator[Path] | None) -> list[Block]:
        if entries is None:
            return []
        return sorted(Block.from_name(entry.name, self.sysfs) for entry in entries)

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def device_type(self) -> BlockDeviceType:
        """Classify the device's underlying technology.

        Rules are tried in order and the first match wins, so an NVMe
        partition is a PARTITION, not NVME:

        1. PARTITION if ``partition`` parses
        2. DEVICE_MAPPER, LOOP, MULTIPLE_DEVICE, NVME, RAM_DISK,
           COMPRESSED_RAM_DISK for ``dm-N``, ``loopN``, ``mdN``, ``nvmeN``,
           ``ramN``, ``zramN`` (only the first character after the prefix is
           checked for a digit)
        3. SCSI if ``device/type`` parses as a SCSI type code
        4. STORAGE_DEVICE for ``sd`` followed by a letter
        5. UNKNOWN
        """
        try:
            self.partition()
            return BlockDeviceType(DeviceKind.PARTITION)
        except (OSError, AttributeParseError):
            pass

        name = self.name
        for prefix, kind in NUMBERED_NAME_PREFIXES:
            if _has_char_after(name, prefix, string.digits):
                return BlockDeviceType(kind)

        try:
            return BlockDeviceType(DeviceKind.SCSI, self.device_scsi_type())
        except (OSError, AttributeParseError) as e:
            Logger.debug("block", f"{name}: no SCSI type ({e})")

        if _has_char_after(name, SCSI_DISK_PREFIX, string.ascii_letters):
            return BlockDeviceType(DeviceKind.STORAGE_DEVICE)

        return BlockDeviceType(DeviceKind.UNKNOWN)

    def device_scsi_type(self) -> ScsiDeviceType:
        """Decode ``device/type``.

        Raises:
            OSError: If the device exposes no ``device/type``
            AttributeParseError: If the code is not a decimal byte
        """
        return self.parse_file("device/type", scsi_type_from_str)

    # -------------------------------------------------------------------------
    # Decoded attributes
    # -------------------------------------------------------------------------

    def size_bytes(self) -> int:
        """Return the capacity in bytes (``size`` counts 512-byte sectors)."""
        return self.size() * SECTOR_SIZE

    def stat_counters(self) -> BlockStat:
        """Return the I/O counters of the ``stat`` attribute."""
        counters = self.parse_file("stat", _parse_counters)
        if len(counters) < 11:
            raise AttributeParseError(
                self.path / "stat", " ".join(map(str, counters)), BlockStat
            )
        return BlockStat.from_counters(counters)

    def inflight_counters(self) -> tuple[int, int]:
        """Return (reads, writes) currently in flight."""
        counters = self.parse_file("inflight", _parse_counters)
        if len(counters) != 2:
            raise AttributeParseError(
                self.path / "inflight", " ".join(map(str, counters)), tuple
            )
        return counters[0], counters[1]

    def queue_scheduler(self) -> BlockScheduler:
        """Return the available I/O schedulers and the active one."""
        return parse_scheduler(self.read_file("queue/scheduler"))

    # -------------------------------------------------------------------------
    # Base properties
    # -------------------------------------------------------------------------

    alignment_offset = sysfs_attribute("alignment_offset", int)
    capability = sysfs_attribute(
        "capability", _hex, doc="Return the GENHD_FL_* flags (hex in sysfs)."
    )
    dev = sysfs_attribute("dev", doc="Return 'major:minor'.")
    discard_alignment = sysfs_attribute("discard_alignment", int)
    events = sysfs_attribute("events")
    events_async = sysfs_attribute("events_async")
    events_poll_msecs = sysfs_attribute("events_poll_msecs", int)
    ext_range = sysfs_attribute("ext_range", int)
    hidden = sysfs_attribute("hidden", int)
    inflight = sysfs_attribute("inflight")
    partition = sysfs_attribute("partition", _byte)
    range = sysfs_attribute("range", int)
    removable = sysfs_attribute("removable", int)
    ro = sysfs_attribute("ro", int)
    size = sysfs_attribute("size", int, doc="Return the size in 512-byte sectors.")
    start = sysfs_attribute("start", int)
    stat = sysfs_attribute("stat")
    uevent = sysfs_attribute("uevent")

    # device

    device_blocked = sysfs_attribute("device/device_blocked", int)
    device_busy = sysfs_attribute("device/device_busy", int)
    device_model = sysfs_attribute("device/model")
    device_rev = sysfs_attribute("device/rev")
    device_state = sysfs_attribute("device/state")
    device_vendor = sysfs_attribute("device/vendor")

    # dm

    dm_name = sysfs_attribute("dm/name")
    dm_uuid = sysfs_attribute("dm/uuid")
    dm_suspended = sysfs_attribute("dm/suspended", int)
    dm_use_blk_mq = sysfs_attribute("dm/use_blk_mq", int)
    dm_rq_based_seq_io_merge_deadline = sysfs_attribute(
        "dm/rq_based_seq_io_merge_deadline", int
    )

    # md

    md_array_size = sysfs_attribute("md/array_size")
    md_array_state = sysfs_attribute("md/array_state")
    md_chunk_size = sysfs_attribute("md/chunk_size", int)
    md_component_size = sysfs_attribute("md/component_size", int)
    md_degraded = sysfs_attribute("md/degraded", int)
    md_layout = sysfs_attribute("md/layout", int)
    md_level = sysfs_attribute("md/level")
    md_metadata_version = sysfs_attribute("md/metadata_version")
    md_mismatch_count = sysfs_attribute("md/mismatch_cnt", int)
    md_preread_bypass_threshold = sysfs_attribute("md/preread_bypass_threshold", int)
    md_raid_disks = sysfs_attribute("md/raid_disks", int)
    md_reshape_position = sysfs_attribute("md/reshape_position")
    md_resync_start = sysfs_attribute("md/resync_start")
    md_safe_mode_delay = sysfs_attribute("md/safe_mode_delay", float)
    md_stripe_cache_active = sysfs_attribute("md/stripe_cache_active", int)
    md_stripe_cache_size = sysfs_attribute("md/stripe_cache_size", int)
    md_suspend_hi = sysfs_attribute("md/suspend_hi", int)
    md_suspend_lo = sysfs_attribute("md/suspend_lo", int)
    md_sync_action = sysfs_attribute("md/sync_action")
    md_sync_completed = sysfs_attribute("md/sync_completed")
    md_sync_force_parallel = sysfs_attribute("md/sync_force_parallel", int)
    md_sync_max = sysfs_attribute("md/sync_max")
    md_sync_min = sysfs_attribute("md/sync_min", int)
    md_sync_speed = sysfs_attribute("md/sync_speed")
    md_sync_speed_max = sysfs_attribute("md/sync_speed_max")
    md_sync_speed_min = sysfs_attribute("md/sync_speed_min")

    # queue

    queue_add_random = sysfs_attribute("queue/add_random", int)
    queue_chunk_sectors = sysfs_attribute("queue/chunk_sectors", int)
    queue_dax = sysfs_attribute("queue/dax", int)
    queue_discard_granularity = sysfs_attribute("queue/discard_granularity", int)
    queue_discard_max_bytes = sysfs_attribute("queue/discard_max_bytes", int)
    queue_discard_max_hw_bytes = sysfs_attribute("queue/discard_max_hw_bytes", int)
    queue_discard_zeroes_data = sysfs_attribute("queue/discard_zeroes_data", int)
    queue_fua = sysfs_attribute("queue/fua", int)
    queue_hw_sector_size = sysfs_attribute("queue/hw_sector_size", int)
    queue_io_poll = sysfs_attribute("queue/io_poll", int)
    queue_io_poll_delay = sysfs_attribute("queue/io_poll_delay", int)
    queue_iostats = sysfs_attribute("queue/iostats", int)
    queue_logical_block_size = sysfs_attribute("queue/logical_block_size", int)
    queue_max_discard_segments = sysfs_attribute("queue/max_discard_segments", int)
    queue_max_hw_sectors_kb = sysfs_attribute("queue/max_hw_sectors_kb", int)
    queue_max_integrity_segments = sysfs_attribute(
        "queue/max_integrity_segments", int
    )
    queue_max_sectors_kb = sysfs_attribute("queue/max_sectors_kb", int)
    queue_max_segment_size = sysfs_attribute("queue/max_segment_size", int)
    queue_max_segments = sysfs_attribute("queue/max_segments", int)
    queue_minimum_io_size = sysfs_attribute("queue/minimum_io_size", int)
    queue_nomerges = sysfs_attribute("queue/nomerges", int)
    queue_nr_requests = sysfs_attribute("queue/nr_requests", int)
    queue_optimal_io_size = sysfs_attribute("queue/optimal_io_size", int)
    queue_physical_block_size = sysfs_attribute("queue/physical_block_size", int)
    queue_read_ahead_kb = sysfs_attribute("queue/read_ahead_kb", int)
    queue_rotational = sysfs_attribute("queue/rotational", int)
    queue_rq_affinity = sysfs_attribute("queue/rq_affinity", int)
    queue_write_cache = sysfs_attribute("queue/write_cache")
    queue_write_same_max_bytes = sysfs_attribute("queue/write_same_max_bytes", int)
    queue_write_zeroes_max_bytes = sysfs_attribute(
        "queue/write_zeroes_max_bytes", int
    )
    queue_zoned = sysfs_attribute("queue/zoned")

    # queue/iosched (present only for schedulers that expose tunables)

    queue_iosched_back_seek_max = sysfs_attribute("queue/iosched/back_seek_max", int)
    queue_iosched_back_seek_penalty = sysfs_attribute(
        "queue/iosched/back_seek_penalty", int
    )
    queue_iosched_fifo_expire_async = sysfs_attribute(
        "queue/iosched/fifo_expire_async", int
    )
    queue_iosched_fifo_expire_sync = sysfs_attribute(
        "queue/iosched/fifo_expire_sync", int
    )
    queue_iosched_group_idle = sysfs_attribute("queue/iosched/group_idle", int)
    queue_iosched_group_idle_us = sysfs_attribute("queue/iosched/group_idle_us", int)
    queue_iosched_low_latency = sysfs_attribute("queue/iosched/low_latency", int)
    queue_iosched_quantum = sysfs_attribute("queue/iosched/quantum", int)
    queue_iosched_slice_async = sysfs_attribute("queue/iosched/slice_async", int)
    queue_iosched_slice_async_rq = sysfs_attribute(
        "queue/iosched/slice_async_rq", int
    )
    queue_iosched_slice_async_us = sysfs_attribute(
        "queue/iosched/slice_async_us", int
    )
    queue_iosched_slice_idle = sysfs_attribute("queue/iosched/slice_idle", int)
    queue_iosched_slice_idle_us = sysfs_attribute("queue/iosched/slice_idle_us", int)
    queue_iosched_slice_sync = sysfs_attribute("queue/iosched/slice_sync", int)
    queue_iosched_slice_sync_us = sysfs_attribute("queue/iosched/slice_sync_us", int)
    queue_iosched_target_latency = sysfs_attribute(
        "queue/iosched/target_latency", int
    )
    queue_iosched_target_latency_us = sysfs_attribute(
        "queue/iosched/target_latency_us", int
    )
