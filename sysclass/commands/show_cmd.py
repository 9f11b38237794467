"""Show command - details and relations of one block device."""

from __future__ import annotations

import psutil

from sysclass.backends.block import Block
from sysclass.backends.sysfs import SysfsAccessor
from sysclass.commands.list_cmd import summarize
from sysclass.commands.output import format_bytes, read_optional, render
from sysclass.models.block_models import BlockDeviceDetail
from sysclass.models.constants import OutputFormat


def _mount_points(name: str) -> list[str]:
    """Return where /dev/<name> is mounted, according to psutil."""
    device = f"/dev/{name}"
    try:
        partitions = psutil.disk_partitions(all=False)
    except OSError:
        return []
    return [p.mountpoint for p in partitions if p.device == device]


def describe(block: Block) -> BlockDeviceDetail:
    """Collect the summary, scheduler and relations of one device."""
    summary = summarize(block)
    return BlockDeviceDetail(
        **summary.model_dump(),
        scheduler=read_optional(block.queue_scheduler),
        children=[child.name for child in block.children()],
        slaves=[slave.name for slave in read_optional(block.slave_devices, [])],
        holders=[
            holder.name for holder in read_optional(block.holder_devices, [])
        ],
        mount_points=_mount_points(block.name),
    )


def _to_text(detail: BlockDeviceDetail) -> str:
    scheduler = "-"
    if detail.scheduler is not None and detail.scheduler.schedulers:
        scheduler = " ".join(
            f"[{name}]" if i == detail.scheduler.active else name
            for i, name in enumerate(detail.scheduler.schedulers)
        )
    rows = [
        ("Name", detail.name),
        ("Path", detail.path),
        ("Type", detail.device_type),
        ("Size", format_bytes(detail.size_bytes)),
        ("Device", detail.dev or "-"),
        ("Read-only", "-" if detail.read_only is None else str(detail.read_only)),
        ("Removable", "-" if detail.removable is None else str(detail.removable)),
        ("Vendor", detail.vendor or "-"),
        ("Model", detail.model or "-"),
        ("Parent", detail.parent or "-"),
        ("Children", ", ".join(detail.children) or "-"),
        ("Slaves", ", ".join(detail.slaves) or "-"),
        ("Holders", ", ".join(detail.holders) or "-"),
        ("Scheduler", scheduler),
        ("Mounted on", ", ".join(detail.mount_points) or "-"),
    ]
    return "\n".join(f"{label + ':':<12} {value}" for label, value in rows)


def run_show(
    sysfs: SysfsAccessor, name: str, fmt: OutputFormat = OutputFormat.TEXT
) -> str:
    """Return the rendered details of one device.

    Raises:
        DeviceNotFoundError: If there is no block device with that name
    """
    detail = describe(Block.from_name(name, sysfs))
    if fmt == OutputFormat.TEXT:
        return _to_text(detail)
    return render(detail, fmt)
