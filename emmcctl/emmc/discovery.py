"""eMMC/SD block device discovery."""

import re

from emmcctl.core.context import Context
from emmcctl.emmc.models import Device
from emmcctl.lib.filesystem import FileError, is_block_device, read_file
from emmcctl.lib.process import CommandError, run_command

# Whole devices only; boot and RPMB partitions (mmcblk0boot0, ...) are skipped
DEVICE_PATTERN = re.compile(r"mmcblk[0-9]+")

BYTES_PER_SECTOR = 512
BYTES_PER_GB = 1024 ** 3


def list_block_devices(context: Context) -> list[str]:
    """Get block device names in lsblk order."""
    try:
        stdout = run_command(["lsblk", "-dno", "NAME"], context, check=True)
    except CommandError:
        return []

    return [line.strip() for line in stdout.splitlines() if line.strip()]


def get_capacity_gb(name: str, context: Context) -> int:
    """Device capacity in whole GB from the sysfs sector count, 0 if unknown."""
    try:
        content = read_file(f"/sys/block/{name}/size", context)
        sectors = int(content.strip())
    except (FileError, ValueError):
        return 0

    return max(sectors, 0) * BYTES_PER_SECTOR // BYTES_PER_GB


def discover_devices(context: Context) -> list[Device]:
    """
    Find eMMC/SD devices.

    Returns:
        Devices named mmcblk<N> whose /dev node is a block device, in
        the order lsblk reports them. Empty when none are present.
    """
    devices = []
    for name in list_block_devices(context):
        if not DEVICE_PATTERN.fullmatch(name):
            continue
        if not is_block_device(f"/dev/{name}", context):
            continue
        devices.append(Device(name=name, capacity_gb=get_capacity_gb(name, context)))

    return devices
