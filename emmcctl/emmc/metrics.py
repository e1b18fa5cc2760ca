"""
Wear, lifespan and health arithmetic.

Pure functions over already-collected values. Decimal fixed-point is
used wherever the figures are shown, so results are exact and
reproducible: rates carry 2 decimals, day and year figures are
truncated the way an integer-scale calculator would truncate them.
"""

from decimal import ROUND_DOWN, Decimal, DecimalException

from emmcctl.core.config import (
    DEFAULT_CYCLES_MAX,
    DEFAULT_WEAR_THRESHOLD_CRITICAL,
    DEFAULT_WEAR_THRESHOLD_WARNING,
    Config,
)
from emmcctl.emmc.models import (
    Device,
    DeviceAnalysis,
    HealthStatus,
    LifespanProjection,
    LifetimeEstimate,
    PreEolState,
    PreEolStatus,
    RecommendationTier,
    Recommendations,
    WearLevels,
    WriteRates,
    WriteStats,
)

BYTES_PER_SECTOR = 512
BYTES_PER_GB_DECIMAL = 1e9
SECONDS_PER_DAY = 86400
DAYS_PER_YEAR = 365
MS_PER_SECOND = 1000

# Register value 0x0A means 90-100% used; anything above is past rated life
MAX_WEAR_STEP = 10
WEAR_PCT_PER_STEP = 10

PRE_EOL_STATES = {
    1: PreEolState.NORMAL,
    2: PreEolState.WARNING,
    3: PreEolState.URGENT,
}

RECOMMENDATION_LINES = {
    RecommendationTier.REPLACE: (
        "Consider device replacement soon",
        "Reduce non-essential write operations",
        "Implement regular backup procedures",
    ),
    RecommendationTier.MONITOR: (
        "Monitor device status regularly",
        "Optimize write-intensive applications",
        "Plan for eventual replacement",
    ),
    RecommendationTier.NORMAL: (
        "Device is in excellent condition",
        "Annual monitoring is sufficient",
        "Continue normal operation",
    ),
}

TWO_PLACES = Decimal("0.01")
ONE_PLACE = Decimal("0.1")


def truncate(value: Decimal, places: Decimal = ONE_PLACE) -> Decimal:
    """Cut a value to the given places without rounding."""
    return value.quantize(places, rounding=ROUND_DOWN)


def to_fixed(value: float) -> Decimal:
    """Round a float to 2 places the way printf("%.2f") does."""
    return Decimal(f"{value:.2f}")


def parse_hex(text: str | None) -> int | None:
    """Hex digits to int; None for missing or malformed text."""
    if text is None:
        return None
    try:
        return int(text, 16)
    except ValueError:
        return None


def compute_write_rates(stats: WriteStats) -> WriteRates:
    """
    Extrapolate a daily write volume from the counters since boot.

    Assumes the uptime covers the device's whole write history, which
    is not true after a reboot.
    """
    bytes_written = stats.sectors_written * BYTES_PER_SECTOR
    uptime = float(stats.uptime_seconds)

    if uptime > 0:
        daily = bytes_written * (SECONDS_PER_DAY / uptime) / BYTES_PER_GB_DECIMAL
    else:
        daily = 0.0

    return WriteRates(
        daily_gb=to_fixed(daily),
        total_gb=to_fixed(bytes_written / BYTES_PER_GB_DECIMAL),
    )


def wear_percentage(value: int) -> int:
    """Map a life time estimate step (0-10) to a percentage, clamped to 100."""
    if value < 0:
        return 0
    if value <= MAX_WEAR_STEP:
        return value * WEAR_PCT_PER_STEP
    return 100


def compute_wear(estimate: LifetimeEstimate) -> WearLevels:
    """Decode Type A/B estimates; either missing means no wear data at all."""
    a_value = parse_hex(estimate.a_hex)
    b_value = parse_hex(estimate.b_hex)

    if a_value is None or b_value is None:
        return WearLevels(a_value=0, b_value=0, a_pct=0, b_pct=0, avg_pct=0)

    a_pct = wear_percentage(a_value)
    b_pct = wear_percentage(b_value)
    return WearLevels(
        a_value=a_value,
        b_value=b_value,
        a_pct=a_pct,
        b_pct=b_pct,
        avg_pct=(a_pct + b_pct) // 2,
    )


def interpret_pre_eol(pre_eol_hex: str | None) -> PreEolStatus:
    """Decode the Pre-EOL register."""
    if pre_eol_hex is None:
        return PreEolStatus(value=0, state=PreEolState.UNAVAILABLE)

    value = parse_hex(pre_eol_hex)
    if value is None:
        return PreEolStatus(value=0, state=PreEolState.UNDEFINED)

    return PreEolStatus(value=value, state=PRE_EOL_STATES.get(value, PreEolState.UNDEFINED))


def project_lifespan(
    capacity_gb: int,
    avg_wear_pct: int,
    daily_gb: Decimal,
    cycles_max: int = DEFAULT_CYCLES_MAX,
) -> LifespanProjection:
    """
    Project remaining endurance.

    Days and years stay None ("infinity") when nothing is being written,
    no endurance remains, capacity is unknown, or the division fails.
    """
    avg_wear_pct = min(max(avg_wear_pct, 0), 100)
    tbw_max = capacity_gb * cycles_max
    remaining_pct = 100 - avg_wear_pct

    days_left = None
    years_left = None
    if daily_gb > 0 and remaining_pct > 0 and capacity_gb > 0:
        try:
            days = int(Decimal(tbw_max * remaining_pct // 100) / daily_gb)
            years = truncate(Decimal(days) / DAYS_PER_YEAR)
        except (DecimalException, ZeroDivisionError):
            pass
        else:
            days_left, years_left = days, years

    return LifespanProjection(
        tbw_max=tbw_max,
        remaining_pct=remaining_pct,
        tbw_remaining=tbw_max * remaining_pct // 100,
        cycles_used=avg_wear_pct * cycles_max // 100,
        cycles_max=cycles_max,
        days_left=days_left,
        years_left=years_left,
    )


def assess_health(
    avg_wear_pct: int,
    pre_eol: PreEolState,
    warning_threshold: int = DEFAULT_WEAR_THRESHOLD_WARNING,
    critical_threshold: int = DEFAULT_WEAR_THRESHOLD_CRITICAL,
) -> HealthStatus:
    """Classify health from average wear and the Pre-EOL state."""
    if avg_wear_pct <= warning_threshold and pre_eol == PreEolState.NORMAL:
        return HealthStatus.EXCELLENT
    if avg_wear_pct <= critical_threshold and pre_eol in (PreEolState.NORMAL, PreEolState.WARNING):
        return HealthStatus.GOOD
    return HealthStatus.ATTENTION_REQUIRED


def recommend(
    avg_wear_pct: int,
    warning_threshold: int = DEFAULT_WEAR_THRESHOLD_WARNING,
    critical_threshold: int = DEFAULT_WEAR_THRESHOLD_CRITICAL,
) -> Recommendations:
    """Pick the guidance block for an average wear level."""
    if avg_wear_pct > critical_threshold:
        tier = RecommendationTier.REPLACE
    elif avg_wear_pct > warning_threshold:
        tier = RecommendationTier.MONITOR
    else:
        tier = RecommendationTier.NORMAL
    return Recommendations(tier=tier, lines=RECOMMENDATION_LINES[tier])


def build_analysis(
    device: Device,
    stats: WriteStats,
    estimate: LifetimeEstimate,
    config: Config | None = None,
) -> DeviceAnalysis:
    """Run every calculation for one device."""
    config = config or Config()

    rates = compute_write_rates(stats)
    wear = compute_wear(estimate)
    pre_eol = interpret_pre_eol(estimate.pre_eol_hex)
    projection = project_lifespan(
        device.capacity_gb, wear.avg_pct, rates.daily_gb, config.cycles_max
    )
    health = assess_health(
        wear.avg_pct,
        pre_eol.state,
        config.wear_threshold_warning,
        config.wear_threshold_critical,
    )
    recommendations = recommend(
        wear.avg_pct, config.wear_threshold_warning, config.wear_threshold_critical
    )

    return DeviceAnalysis(
        device=device,
        stats=stats,
        rates=rates,
        wear=wear,
        pre_eol=pre_eol,
        projection=projection,
        health=health,
        recommendations=recommendations,
        uptime_days=truncate(stats.uptime_seconds / SECONDS_PER_DAY),
        write_time_seconds=truncate(Decimal(stats.write_time_ms) / MS_PER_SECOND),
    )
