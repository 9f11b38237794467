"""List command - enumerates block devices."""

from __future__ import annotations

from sysclass.backends.block import Block
from sysclass.backends.sysfs import SysfsAccessor
from sysclass.commands.output import format_bytes, read_flag, read_optional, render
from sysclass.models.block_models import BlockDeviceSummary, BlockListOutput
from sysclass.models.constants import OutputFormat
from sysclass.utils.logger import Logger


def summarize(block: Block) -> BlockDeviceSummary:
    """Collect the summary fields of one device, tolerating missing attributes."""
    parent = block.parent_device()
    return BlockDeviceSummary(
        name=block.name,
        path=str(block.path),
        device_type=str(block.device_type()),
        size_bytes=read_optional(block.size_bytes),
        read_only=read_flag(block.ro),
        removable=read_flag(block.removable),
        dev=read_optional(block.dev),
        parent=parent.name if parent is not None else None,
        model=read_optional(block.device_model),
        vendor=read_optional(block.device_vendor),
    )


def collect_devices(sysfs: SysfsAccessor) -> BlockListOutput:
    """Summarize every block device under the accessor's root."""
    return BlockListOutput(
        sysfs_root=str(sysfs.root),
        devices=[summarize(block) for block in Block.all(sysfs)],
    )


def _to_text(output: BlockListOutput) -> str:
    header = f"{'NAME':<12} {'TYPE':<20} {'SIZE':>11}  {'RO':<3} {'PARENT':<10} MODEL"
    lines = [header]
    for device in output.devices:
        ro = "-" if device.read_only is None else str(int(device.read_only))
        lines.append(
            f"{device.name:<12} {device.device_type:<20} "
            f"{format_bytes(device.size_bytes):>11}  {ro:<3} "
            f"{device.parent or '-':<10} {device.model or ''}".rstrip()
        )
    return "\n".join(lines)


def run_list(sysfs: SysfsAccessor, fmt: OutputFormat = OutputFormat.TEXT) -> str:
    """Return the rendered device list.

    Raises:
        OSError: If the block class directory cannot be listed
    """
    output = collect_devices(sysfs)
    Logger.debug("cli", f"Listed {len(output.devices)} block devices")
    if fmt == OutputFormat.TEXT:
        return _to_text(output)
    return render(output, fmt)
