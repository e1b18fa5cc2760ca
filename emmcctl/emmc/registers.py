"""Extended CSD register dump and lifetime field parsing."""

from emmcctl.core.context import Context
from emmcctl.emmc.errors import RegisterReadError
from emmcctl.emmc.models import LifetimeEstimate
from emmcctl.lib.process import CommandError, run_command

LIFE_TIME_EST_A = "EXT_CSD_DEVICE_LIFE_TIME_EST_TYP_A"
LIFE_TIME_EST_B = "EXT_CSD_DEVICE_LIFE_TIME_EST_TYP_B"
PRE_EOL_INFO = "EXT_CSD_PRE_EOL_INFO"

READ_FAILURE_HINT = (
    "SD cards do not provide extended CSD registers, and reading them "
    "requires root privileges"
)


def extcsd_command(device_path: str, context: Context) -> list[str]:
    """Build the register dump command, elevating with sudo when not root."""
    cmd = ["mmc", "extcsd", "read", device_path]
    if not context.is_root():
        cmd = ["sudo"] + cmd
    return cmd


def read_registers(name: str, context: Context) -> str:
    """
    Dump the extended CSD registers of a device as text.

    No timeout is applied: sudo may be waiting for a password.

    Raises:
        RegisterReadError: If mmc fails or prints nothing
    """
    device_path = f"/dev/{name}"
    cmd = extcsd_command(device_path, context)
    try:
        stdout = run_command(cmd, context, check=True, timeout=None)
    except CommandError as e:
        raise RegisterReadError(
            name,
            f"Failed to read eMMC registers for {device_path} ({READ_FAILURE_HINT})",
            e.stderr or str(e),
        ) from e

    if not stdout or not stdout.strip():
        raise RegisterReadError(
            name, f"Reading eMMC registers for {device_path} produced no output"
        )

    return stdout


def extract_field(extcsd: str, label: str) -> str | None:
    """
    Get the hex value of the first line mentioning label.

    Lines look like ``... [EXT_CSD_PRE_EOL_INFO]: 0x01``. The value is
    the text between the first and second ": " separators, without 0x.

    Returns:
        The hex digits, or None when the field is missing or empty
    """
    for line in extcsd.splitlines():
        if label not in line:
            continue
        parts = line.split(": ")
        if len(parts) < 2:
            continue
        value = parts[1].replace("0x", "").strip()
        return value or None
    return None


def parse_lifetime_estimates(extcsd: str) -> LifetimeEstimate:
    """Pull the wear and Pre-EOL fields out of a register dump."""
    return LifetimeEstimate(
        a_hex=extract_field(extcsd, LIFE_TIME_EST_A),
        b_hex=extract_field(extcsd, LIFE_TIME_EST_B),
        pre_eol_hex=extract_field(extcsd, PRE_EOL_INFO),
    )
