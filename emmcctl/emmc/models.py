"""Data types passed through the analysis pipeline."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

INFINITY = "infinity"


class PreEolState(Enum):
    """Pre-EOL register interpretation."""

    NORMAL = "normal"
    WARNING = "warning"
    URGENT = "urgent"
    UNDEFINED = "undefined"
    UNAVAILABLE = "unavailable"


PRE_EOL_DESCRIPTIONS = {
    PreEolState.NORMAL: "Normal",
    PreEolState.WARNING: "Warning (80% reserved blocks consumed)",
    PreEolState.URGENT: "Urgent (90% reserved blocks consumed)",
    PreEolState.UNDEFINED: "Undefined",
    PreEolState.UNAVAILABLE: "Not available",
}


class HealthStatus(Enum):
    """Overall device health."""

    EXCELLENT = "excellent"
    GOOD = "good"
    ATTENTION_REQUIRED = "attention_required"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class RecommendationTier(Enum):
    """Which guidance block applies."""

    REPLACE = "replace"
    MONITOR = "monitor"
    NORMAL = "normal"


@dataclass
class Device:
    """A discovered eMMC/SD block device."""

    name: str
    capacity_gb: int

    @property
    def path(self) -> str:
        return f"/dev/{self.name}"


@dataclass
class WriteStats:
    """Cumulative write counters sampled from sysfs."""

    sectors_written: int
    write_time_ms: int
    uptime_seconds: Decimal


@dataclass
class WriteRates:
    """Write volume derived from WriteStats, rounded to 2 places."""

    daily_gb: Decimal
    total_gb: Decimal


@dataclass
class LifetimeEstimate:
    """Raw hex register values, None when the field was not reported."""

    a_hex: str | None
    b_hex: str | None
    pre_eol_hex: str | None


@dataclass
class WearLevels:
    """Decoded Type A/B wear estimates."""

    a_value: int
    b_value: int
    a_pct: int
    b_pct: int
    avg_pct: int


@dataclass
class PreEolStatus:
    """Decoded Pre-EOL register."""

    value: int
    state: PreEolState

    @property
    def description(self) -> str:
        return PRE_EOL_DESCRIPTIONS[self.state]


@dataclass
class LifespanProjection:
    """Remaining endurance. days_left/years_left are None when unbounded."""

    tbw_max: int
    remaining_pct: int
    tbw_remaining: int
    cycles_used: int
    cycles_max: int
    days_left: int | None
    years_left: Decimal | None

    @property
    def days_text(self) -> str:
        return INFINITY if self.days_left is None else str(self.days_left)

    @property
    def years_text(self) -> str:
        return INFINITY if self.years_left is None else str(self.years_left)


@dataclass
class Recommendations:
    """Guidance block chosen from average wear."""

    tier: RecommendationTier
    lines: tuple[str, ...]


@dataclass
class DeviceAnalysis:
    """Everything the report shows for one device."""

    device: Device
    stats: WriteStats
    rates: WriteRates
    wear: WearLevels
    pre_eol: PreEolStatus
    projection: LifespanProjection
    health: HealthStatus
    recommendations: Recommendations
    uptime_days: Decimal
    write_time_seconds: Decimal
