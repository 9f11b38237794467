"""Tests for block attribute readers and decoders."""

import pytest
from pydantic import ValidationError

from sysclass.backends.block import Block, parse_scheduler
from sysclass.errors import AttributeParseError
from sysclass.models.block_models import BlockScheduler, BlockStat

STAT_LINE = (
    "  184729    51034  9468714   104373   278210   302551 15483816  1071228"
    "        0   361456  1213380\n"
)
STAT_LINE_WITH_DISCARD_AND_FLUSH = (
    "1 2 3 4 5 6 7 8 0 10 11 12 13 14 15 16 17\n"
)


def _block(fake_sysfs, files, name="sdx"):
    fake_sysfs.add_block(name, files)
    return Block.from_name(name, fake_sysfs.accessor)


@pytest.mark.parametrize(
    ("text", "schedulers", "active", "active_name"),
    [
        ("noop deadline [cfq]", ["noop", "deadline", "cfq"], 2, "cfq"),
        (
            "[mq-deadline] kyber bfq none\n",
            ["mq-deadline", "kyber", "bfq", "none"],
            0,
            "mq-deadline",
        ),
        ("mq-deadline kyber [none]", ["mq-deadline", "kyber", "none"], 2, "none"),
        ("[none]", ["none"], 0, "none"),
    ],
)
def test_parse_scheduler(text, schedulers, active, active_name):
    """Test the bracketed scheduler is marked active."""
    scheduler = parse_scheduler(text)
    assert scheduler.schedulers == schedulers
    assert scheduler.active == active
    assert scheduler.active_name() == active_name


def test_parse_scheduler_without_brackets():
    """Test active defaults to the first entry when nothing is bracketed."""
    scheduler = parse_scheduler("noop deadline")
    assert scheduler == BlockScheduler(schedulers=["noop", "deadline"], active=0)
    assert scheduler.active_name() == "noop"


def test_parse_scheduler_empty():
    """Test an empty attribute yields no schedulers."""
    scheduler = parse_scheduler("")
    assert scheduler.schedulers == []
    assert scheduler.active == 0
    with pytest.raises(IndexError):
        scheduler.active_name()


def test_scheduler_active_out_of_range():
    """Test the model rejects an active index past the list."""
    with pytest.raises(ValidationError):
        BlockScheduler(schedulers=["none"], active=1)
    with pytest.raises(ValidationError):
        BlockScheduler(schedulers=["none"], active=-1)


def test_queue_scheduler(disk_tree):
    """Test reading queue/scheduler from a device."""
    sda = Block.from_name("sda", disk_tree.accessor)
    assert sda.queue_scheduler().active_name() == "mq-deadline"
    nvme = Block.from_name("nvme0n1", disk_tree.accessor)
    assert nvme.queue_scheduler().schedulers == ["none", "mq-deadline"]


def test_queue_scheduler_missing(disk_tree):
    """Test devices without a queue raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        Block.from_name("sda1", disk_tree.accessor).queue_scheduler()


def test_integer_attributes(disk_tree):
    """Test integer attributes strip the trailing newline."""
    sda = Block.from_name("sda", disk_tree.accessor)
    assert sda.size() == 1953525168
    assert sda.ro() == 0
    assert sda.removable() == 0
    assert sda.size_bytes() == 1953525168 * 512


def test_text_attributes(disk_tree):
    """Test text attributes keep inner and leading whitespace."""
    sda = Block.from_name("sda", disk_tree.accessor)
    assert sda.dev() == "8:0"
    assert sda.device_model() == "Samsung SSD 870"
    assert sda.device_vendor() == "ATA"
    assert Block.from_name("dm-0", disk_tree.accessor).dm_name() == "vg0-root"
    assert Block.from_name("md0", disk_tree.accessor).md_level() == "raid1"


def test_missing_attribute(disk_tree):
    """Test attributes the device does not expose raise FileNotFoundError."""
    loop0 = Block.from_name("loop0", disk_tree.accessor)
    with pytest.raises(FileNotFoundError):
        loop0.partition()
    with pytest.raises(FileNotFoundError):
        loop0.md_raid_disks()
    with pytest.raises(FileNotFoundError):
        loop0.device_model()


@pytest.mark.parametrize("content", ["", "abc", "1.5", "12 34"])
def test_integer_parse_error(fake_sysfs, content):
    """Test malformed integers raise AttributeParseError."""
    block = _block(fake_sysfs, {"size": f"{content}\n"})
    with pytest.raises(AttributeParseError) as exc_info:
        block.size()
    assert exc_info.value.value == content
    assert exc_info.value.path == block.path / "size"


@pytest.mark.parametrize("content", ["-3", "256", "1_0", "0x1"])
def test_partition_must_be_a_byte(fake_sysfs, content):
    """Test partition numbers are unsigned decimal bytes."""
    block = _block(fake_sysfs, {"partition": f"{content}\n"})
    with pytest.raises(AttributeParseError):
        block.partition()


def test_partition_largest_byte(fake_sysfs):
    """Test 255 is still a valid partition number."""
    assert _block(fake_sysfs, {"partition": "255\n"}).partition() == 255


def test_capability_is_hex(fake_sysfs):
    """Test capability is decoded as hexadecimal."""
    assert _block(fake_sysfs, {"capability": "50\n"}).capability() == 0x50


def test_md_safe_mode_delay_is_float(fake_sysfs):
    """Test float attributes."""
    block = _block(fake_sysfs, {"md/safe_mode_delay": "0.204\n"}, name="md1")
    assert block.md_safe_mode_delay() == pytest.approx(0.204)


def test_md_mismatch_count_reads_mismatch_cnt(fake_sysfs):
    """Test the attribute name differs from the file name."""
    block = _block(fake_sysfs, {"md/mismatch_cnt": "8\n"}, name="md2")
    assert block.md_mismatch_count() == 8
    assert Block.md_mismatch_count.sysfs_path == "md/mismatch_cnt"


def test_stat_counters(fake_sysfs):
    """Test decoding an 11-field stat line."""
    stat = _block(fake_sysfs, {"stat": STAT_LINE}).stat_counters()
    assert stat.read_ios == 184729
    assert stat.write_sectors == 15483816
    assert stat.in_flight == 0
    assert stat.time_in_queue == 1213380
    assert stat.discard_ios is None
    assert stat.flush_ticks is None


def test_stat_counters_newer_kernels(fake_sysfs):
    """Test discard and flush counters are read when present."""
    block = _block(fake_sysfs, {"stat": STAT_LINE_WITH_DISCARD_AND_FLUSH})
    stat = block.stat_counters()
    assert stat.discard_ios == 12
    assert stat.discard_ticks == 15
    assert stat.flush_ios == 16
    assert stat.flush_ticks == 17


@pytest.mark.parametrize("content", ["1 2 3\n", "a b c d e f g h i j k\n"])
def test_stat_counters_malformed(fake_sysfs, content):
    """Test short or non-numeric stat lines raise AttributeParseError."""
    with pytest.raises(AttributeParseError):
        _block(fake_sysfs, {"stat": content}).stat_counters()


def test_stat_raw_text(fake_sysfs):
    """Test the raw stat reader returns the text unparsed."""
    block = _block(fake_sysfs, {"stat": STAT_LINE})
    assert block.stat() == STAT_LINE.rstrip()


def test_block_stat_from_counters_too_short():
    """Test BlockStat needs the 11 base counters."""
    with pytest.raises(ValueError, match="at least 11"):
        BlockStat.from_counters([0] * 10)


def test_inflight_counters(fake_sysfs):
    """Test decoding the inflight pair."""
    block = _block(fake_sysfs, {"inflight": "       3        7\n"})
    assert block.inflight_counters() == (3, 7)


def test_inflight_counters_malformed(fake_sysfs):
    """Test inflight needs exactly two numbers."""
    with pytest.raises(AttributeParseError):
        _block(fake_sysfs, {"inflight": "3\n"}).inflight_counters()


def test_attribute_reads_are_fresh(fake_sysfs):
    """Test each call reads the file again."""
    device_dir = fake_sysfs.add_block("sdy", {"ro": "0\n"})
    block = Block.from_name("sdy", fake_sysfs.accessor)
    assert block.ro() == 0
    (device_dir / "ro").write_text("1\n")
    assert block.ro() == 1


def test_generated_methods_are_named_after_their_path():
    """Test attribute methods carry a name derived from the sysfs path."""
    assert Block.size.__name__ == "size"
    assert Block.device_model.__name__ == "device_model"
    assert Block.queue_iosched_slice_idle.__qualname__ == "queue_iosched_slice_idle"
    assert Block.md_mismatch_count.__name__ == "md_mismatch_cnt"
