"""Per-device write counters and host uptime."""

from decimal import Decimal, InvalidOperation

from emmcctl.core.context import Context
from emmcctl.emmc.errors import StatsError
from emmcctl.emmc.models import WriteStats
from emmcctl.lib.filesystem import FileError, read_file

UPTIME_PATH = "/proc/uptime"

# Zero-based positions in /sys/block/<dev>/stat. The kernel documents
# field 11 as time_in_queue; it is reported as the write time.
SECTORS_WRITTEN_FIELD = 6
WRITE_TIME_FIELD = 10


def read_device_stats(name: str, context: Context) -> tuple[int, int]:
    """
    Read cumulative write counters for a device.

    Returns:
        (sectors_written, write_time_ms)

    Raises:
        StatsError: If the stat record is unreadable or malformed
    """
    stat_path = f"/sys/block/{name}/stat"
    try:
        content = read_file(stat_path, context)
    except FileError as e:
        raise StatsError(
            name, f"Cannot read device statistics for /dev/{name}: {stat_path}", str(e)
        ) from e

    fields = content.split()
    if len(fields) <= WRITE_TIME_FIELD:
        raise StatsError(
            name, f"Device statistics for /dev/{name} are incomplete: {stat_path}"
        )

    try:
        sectors_written = int(fields[SECTORS_WRITTEN_FIELD])
        write_time_ms = int(fields[WRITE_TIME_FIELD])
    except ValueError as e:
        raise StatsError(
            name, f"Device statistics for /dev/{name} are not numeric: {stat_path}"
        ) from e

    return sectors_written, write_time_ms


def read_uptime(context: Context, device: str = "") -> Decimal:
    """
    Read host uptime in seconds.

    Raises:
        StatsError: If /proc/uptime is unreadable or malformed
    """
    try:
        content = read_file(UPTIME_PATH, context)
        uptime = Decimal(content.split()[0])
    except (FileError, IndexError, InvalidOperation) as e:
        raise StatsError(device, f"Cannot read system uptime from {UPTIME_PATH}") from e

    if not uptime.is_finite() or uptime < 0:
        raise StatsError(device, f"Invalid system uptime in {UPTIME_PATH}")

    return uptime


def sample_write_stats(name: str, context: Context) -> WriteStats:
    """Sample write counters together with the uptime they accumulated over."""
    uptime = read_uptime(context, name)
    sectors_written, write_time_ms = read_device_stats(name, context)
    return WriteStats(
        sectors_written=sectors_written,
        write_time_ms=write_time_ms,
        uptime_seconds=uptime,
    )
