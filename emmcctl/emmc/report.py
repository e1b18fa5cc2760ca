"""Fixed-layout analysis report."""

from typing import Any

from emmcctl.core.style import ERROR, LABEL, SUBTITLE, SUCCESS, TITLE, WARNING, PlainStyle
from emmcctl.emmc.models import DeviceAnalysis, HealthStatus, PreEolState, RecommendationTier

REPORT_TITLE = "eMMC LIFETIME ANALYSIS REPORT"
RULE = "=" * 79
LABEL_WIDTH = 16
INDENT = "   "
BULLET = "•"

PRE_EOL_STYLES = {
    PreEolState.NORMAL: SUCCESS,
    PreEolState.WARNING: WARNING,
    PreEolState.URGENT: ERROR,
}

HEALTH_STYLES = {
    HealthStatus.EXCELLENT: SUCCESS,
    HealthStatus.GOOD: WARNING,
    HealthStatus.ATTENTION_REQUIRED: ERROR,
}

RECOMMENDATION_STYLES = {
    RecommendationTier.REPLACE: ERROR,
    RecommendationTier.MONITOR: WARNING,
    RecommendationTier.NORMAL: SUCCESS,
}


def render_report(analysis: DeviceAnalysis, style: PlainStyle | None = None) -> str:
    """
    Format the analysis of one device.

    Returns:
        Report text ending with a newline. Identical inputs give
        identical text.
    """
    style = style or PlainStyle()
    lines: list[str] = []

    def section(name: str) -> None:
        lines.append(style.apply(SUBTITLE, name))

    def row(label: str, value: str) -> None:
        lines.append(f"{INDENT}{style.apply(LABEL, f'{label:<{LABEL_WIDTH}}:')} {value}")

    device = analysis.device
    stats = analysis.stats
    wear = analysis.wear
    projection = analysis.projection

    lines.append(style.apply(TITLE, RULE))
    lines.append(style.apply(TITLE, REPORT_TITLE))
    lines.append(style.apply(TITLE, RULE))
    lines.append("")

    section("Device Information")
    row("Device Path", device.path)
    row("Capacity", f"{device.capacity_gb} GB")
    row(
        "System Uptime",
        f"{float(stats.uptime_seconds):.1f} seconds ({analysis.uptime_days} days)",
    )
    lines.append("")

    section("Write Statistics")
    row("Daily Write Rate", f"{analysis.rates.daily_gb} GB/day")
    row("Total Written", f"{analysis.rates.total_gb} GB (since boot)")
    row("Write Time", f"{analysis.write_time_seconds} seconds")
    lines.append("")

    section("Flash Memory Status")
    row("Life Time Est A", f"{wear.a_value} ({wear.a_pct}%)")
    row("Life Time Est B", f"{wear.b_value} ({wear.b_pct}%)")
    row("Average Wear", f"{wear.avg_pct}%")
    row("Cycles Used", f"~{projection.cycles_used}/{projection.cycles_max}")
    pre_eol_text = analysis.pre_eol.description
    pre_eol_style = PRE_EOL_STYLES.get(analysis.pre_eol.state)
    if pre_eol_style:
        pre_eol_text = style.apply(pre_eol_style, pre_eol_text)
    row("Pre-EOL Status", pre_eol_text)
    lines.append("")

    section("Lifespan Projection")
    row("Maximum TBW", f"{projection.tbw_max} GB")
    row("Remaining TBW", f"{projection.tbw_remaining} GB")
    row("Estimated Life", f"{projection.days_text} days (~{projection.years_text} years)")
    lines.append("")

    section("Health Assessment")
    row("Status", style.apply(HEALTH_STYLES[analysis.health], analysis.health.label))
    lines.append("")

    section("Recommendations")
    bullet = style.apply(RECOMMENDATION_STYLES[analysis.recommendations.tier], BULLET)
    for line in analysis.recommendations.lines:
        lines.append(f"{INDENT}{bullet} {line}")
    lines.append("")
    lines.append(style.apply(TITLE, RULE))

    return "\n".join(lines) + "\n"


def report_to_dict(analysis: DeviceAnalysis) -> dict[str, Any]:
    """Structured form of the report for JSON output."""
    device = analysis.device
    stats = analysis.stats
    wear = analysis.wear
    projection = analysis.projection

    return {
        "device": {
            "name": device.name,
            "path": device.path,
            "capacity_gb": device.capacity_gb,
            "uptime_seconds": str(stats.uptime_seconds),
            "uptime_days": str(analysis.uptime_days),
        },
        "write_statistics": {
            "sectors_written": stats.sectors_written,
            "daily_gb": str(analysis.rates.daily_gb),
            "total_gb": str(analysis.rates.total_gb),
            "write_time_ms": stats.write_time_ms,
            "write_time_seconds": str(analysis.write_time_seconds),
        },
        "flash_memory": {
            "life_time_est_a": wear.a_value,
            "life_time_est_b": wear.b_value,
            "wear_a_pct": wear.a_pct,
            "wear_b_pct": wear.b_pct,
            "average_wear_pct": wear.avg_pct,
            "cycles_used": projection.cycles_used,
            "cycles_max": projection.cycles_max,
            "pre_eol": analysis.pre_eol.state.value,
            "pre_eol_value": analysis.pre_eol.value,
            "pre_eol_status": analysis.pre_eol.description,
        },
        "lifespan": {
            "tbw_max_gb": projection.tbw_max,
            "tbw_remaining_gb": projection.tbw_remaining,
            "remaining_pct": projection.remaining_pct,
            "days_left": projection.days_text,
            "years_left": projection.years_text,
        },
        "health": analysis.health.value,
        "recommendations": list(analysis.recommendations.lines),
    }
