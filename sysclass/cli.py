#!/usr/bin/env python3
"""sysclass CLI - inspect block devices through sysfs."""

import sys

import click

from sysclass.backends.sysfs import SysfsAccessor
from sysclass.errors import DeviceNotFoundError
from sysclass.models.constants import OutputFormat
from sysclass.utils.env import log_level, sysfs_root
from sysclass.utils.logger import Logger

_FORMAT_OPTION = click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.TEXT.value,
    show_default=True,
    help="Output format",
)


@click.group()
@click.option(
    "--sysfs-root",
    "sysfs_root_option",
    type=click.Path(file_okay=False),
    default=None,
    help="Pseudo-filesystem root (default: $SYSCLASS_SYSFS_ROOT or /sys)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging on stderr")
@click.pass_context
def sysclass(ctx, sysfs_root_option, debug):
    """Inspect Linux block devices through sysfs."""
    if not Logger.is_configured():
        Logger.configure(level=log_level(), output="stderr", timestamps=False)
    if debug:
        Logger.set_level("DEBUG")

    ctx.obj = SysfsAccessor(sysfs_root_option or sysfs_root())
    Logger.get("cli").debug(f"Using sysfs root {ctx.obj.root}")


@sysclass.command(name="list")
@_FORMAT_OPTION
@click.pass_obj
def list_devices(sysfs, fmt):
    """List every block device."""
    from sysclass.commands.list_cmd import run_list

    try:
        click.echo(run_list(sysfs, OutputFormat(fmt.lower())))
    except OSError as e:
        click.echo(f"sysclass: cannot list block devices: {e}", err=True)
        sys.exit(1)


@sysclass.command()
@click.argument("name")
@_FORMAT_OPTION
@click.pass_obj
def show(sysfs, name, fmt):
    r"""Show one block device and its relations.

    \b
    Examples:
      sysclass show sda
      sysclass show dm-0 --format json
    """
    from sysclass.commands.show_cmd import run_show

    try:
        click.echo(run_show(sysfs, name, OutputFormat(fmt.lower())))
    except DeviceNotFoundError:
        click.echo(f"sysclass: no such block device: {name}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"sysclass: cannot read {name}: {e}", err=True)
        sys.exit(1)


@sysclass.command()
@click.pass_obj
def tree(sysfs):
    """Show disks with their partitions and logical devices with their slaves."""
    from sysclass.commands.tree_cmd import run_tree

    try:
        click.echo(run_tree(sysfs))
    except OSError as e:
        click.echo(f"sysclass: cannot list block devices: {e}", err=True)
        sys.exit(1)


@sysclass.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed version information")
def version(verbose):
    """Display sysclass version information."""
    from sysclass.commands.version_cmd import run_version

    click.echo(run_version(verbose=verbose))


if __name__ == "__main__":
    sysclass()
