"""Per-device analysis pipeline."""

from emmcctl.core.config import Config
from emmcctl.core.context import Context
from emmcctl.core.output import Output
from emmcctl.emmc.discovery import get_capacity_gb
from emmcctl.emmc.errors import DeviceNotFoundError
from emmcctl.emmc.metrics import build_analysis
from emmcctl.emmc.models import Device, DeviceAnalysis
from emmcctl.emmc.registers import parse_lifetime_estimates, read_registers
from emmcctl.emmc.stats import sample_write_stats
from emmcctl.lib.filesystem import file_exists


def analyze_device(
    device: Device,
    context: Context,
    output: Output,
    config: Config | None = None,
) -> DeviceAnalysis:
    """
    Collect data for one device and compute its analysis.

    Progress is reported on the output's diagnostic stream.

    Raises:
        AnalysisError: If the device vanished or a data source failed
    """
    if not file_exists(device.path, context):
        raise DeviceNotFoundError(device.name, f"Device {device.path} does not exist")

    output.info("Reading device specifications...")
    current = Device(name=device.name, capacity_gb=get_capacity_gb(device.name, context))

    output.info("Analyzing write statistics...")
    stats = sample_write_stats(device.name, context)

    output.info("Reading eMMC hardware registers...")
    extcsd = read_registers(device.name, context)

    output.info("Parsing lifetime estimates...")
    estimate = parse_lifetime_estimates(extcsd)

    output.info("Calculating lifespan projections...")
    return build_analysis(current, stats, estimate, config)
