"""Tree command - disks with their partitions, logical devices with their slaves."""

from __future__ import annotations

from sysclass.backends.block import Block
from sysclass.backends.sysfs import SysfsAccessor
from sysclass.commands.output import read_optional


def _label(block: Block) -> str:
    return f"{block.name} ({block.device_type()})"


def run_tree(sysfs: SysfsAccessor) -> str:
    """Return an indented view of both device relations.

    Whole devices are listed at the top level. Partitions appear under their
    parent disk, and backing devices under the logical device using them,
    marked with '<-'. A partition whose derived parent has no entry is
    listed at the top level.
    """
    lines: list[str] = []
    for block in Block.all(sysfs):
        parent = block.parent_device()
        if parent is not None and sysfs.is_dir(parent.path):
            continue
        lines.append(_label(block))
        for child in block.children():
            lines.append(f"  {_label(child)}")
        for slave in read_optional(block.slave_devices, []):
            lines.append(f"  <- {_label(slave)}")
    return "\n".join(lines)
