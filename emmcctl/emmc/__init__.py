"""eMMC discovery, register reading and lifetime analysis."""

from emmcctl.emmc.analyzer import analyze_device
from emmcctl.emmc.discovery import discover_devices
from emmcctl.emmc.errors import AnalysisError, DeviceNotFoundError, RegisterReadError, StatsError
from emmcctl.emmc.metrics import build_analysis
from emmcctl.emmc.models import Device, DeviceAnalysis, HealthStatus, PreEolState
from emmcctl.emmc.report import render_report, report_to_dict

__all__ = [
    "AnalysisError",
    "Device",
    "DeviceAnalysis",
    "DeviceNotFoundError",
    "HealthStatus",
    "PreEolState",
    "RegisterReadError",
    "StatsError",
    "analyze_device",
    "build_analysis",
    "discover_devices",
    "render_report",
    "report_to_dict",
]
