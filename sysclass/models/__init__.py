"""Value types and pydantic models for structured output."""

from sysclass.models.block_models import (
    BlockDeviceDetail,
    BlockDeviceSummary,
    BlockDeviceType,
    BlockListOutput,
    BlockScheduler,
    BlockStat,
)
from sysclass.models.constants import DeviceKind, OutputFormat

__all__ = [
    "BlockDeviceDetail",
    "BlockDeviceSummary",
    "BlockDeviceType",
    "BlockListOutput",
    "BlockScheduler",
    "BlockStat",
    "DeviceKind",
    "OutputFormat",
]
