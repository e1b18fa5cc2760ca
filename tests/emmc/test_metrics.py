"""Tests for wear, lifespan and health arithmetic."""

from decimal import Decimal

import pytest

from emmcctl.core.config import Config
from emmcctl.emmc.metrics import (
    RECOMMENDATION_LINES,
    assess_health,
    build_analysis,
    compute_wear,
    compute_write_rates,
    interpret_pre_eol,
    parse_hex,
    project_lifespan,
    recommend,
    truncate,
    wear_percentage,
)
from emmcctl.emmc.models import (
    INFINITY,
    Device,
    HealthStatus,
    LifetimeEstimate,
    PreEolState,
    RecommendationTier,
    WriteStats,
)


def stats(sectors=2000000, write_ms=25000, uptime="86400.00"):
    return WriteStats(
        sectors_written=sectors, write_time_ms=write_ms, uptime_seconds=Decimal(uptime)
    )


class TestParseHex:
    """Tests for parse_hex."""

    @pytest.mark.parametrize("text,expected", [("01", 1), ("0B", 11), ("ff", 255), ("00", 0)])
    def test_valid(self, text, expected):
        assert parse_hex(text) == expected

    @pytest.mark.parametrize("text", [None, "", "zz", "0x"])
    def test_invalid(self, text):
        assert parse_hex(text) is None


class TestWriteRates:
    """Tests for compute_write_rates."""

    def test_one_day_of_uptime(self):
        """1.024 GB written in one day is 1.02 GB/day."""
        rates = compute_write_rates(stats())

        assert str(rates.daily_gb) == "1.02"
        assert str(rates.total_gb) == "1.02"

    def test_half_day_doubles_daily_rate(self):
        rates = compute_write_rates(stats(uptime="43200"))

        assert str(rates.daily_gb) == "2.05"
        assert str(rates.total_gb) == "1.02"

    @pytest.mark.parametrize("uptime", ["0", "86400", "12.5"])
    def test_no_sectors_written(self, uptime):
        """Zero sectors gives 0.00 whatever the uptime."""
        rates = compute_write_rates(stats(sectors=0, uptime=uptime))

        assert str(rates.daily_gb) == "0.00"
        assert str(rates.total_gb) == "0.00"

    def test_zero_uptime(self):
        """Zero uptime yields a daily rate of 0.00 without dividing."""
        rates = compute_write_rates(stats(uptime="0"))

        assert str(rates.daily_gb) == "0.00"
        assert str(rates.total_gb) == "1.02"


class TestWear:
    """Tests for wear_percentage and compute_wear."""

    @pytest.mark.parametrize("value", range(0, 0x100))
    def test_percentage_always_in_range(self, value):
        """Every byte value maps into 0..100."""
        assert 0 <= wear_percentage(value) <= 100

    @pytest.mark.parametrize("value,expected", [(0, 0), (1, 10), (10, 100), (11, 100), (255, 100)])
    def test_percentage_steps(self, value, expected):
        assert wear_percentage(value) == expected

    def test_scenario_five_and_seven(self):
        """05/07 decode to 50%/70% with a 60% average."""
        wear = compute_wear(LifetimeEstimate(a_hex="05", b_hex="07", pre_eol_hex="01"))

        assert (wear.a_pct, wear.b_pct, wear.avg_pct) == (50, 70, 60)

    def test_average_is_floored(self):
        wear = compute_wear(LifetimeEstimate(a_hex="01", b_hex="02", pre_eol_hex=None))

        assert wear.avg_pct == 15

        wear = compute_wear(LifetimeEstimate(a_hex="00", b_hex="01", pre_eol_hex=None))

        assert wear.avg_pct == 5

    def test_missing_type_a_zeroes_both(self):
        """Absence of either field zeroes both percentages."""
        wear = compute_wear(LifetimeEstimate(a_hex=None, b_hex="03", pre_eol_hex="01"))

        assert (wear.a_pct, wear.b_pct, wear.avg_pct) == (0, 0, 0)

    def test_malformed_hex_zeroes_both(self):
        wear = compute_wear(LifetimeEstimate(a_hex="zz", b_hex="03", pre_eol_hex="01"))

        assert wear.avg_pct == 0


class TestPreEol:
    """Tests for interpret_pre_eol."""

    def test_warning_description(self):
        status = interpret_pre_eol("02")

        assert status.state == PreEolState.WARNING
        assert status.description == "Warning (80% reserved blocks consumed)"

    @pytest.mark.parametrize(
        "text,state",
        [
            ("01", PreEolState.NORMAL),
            ("03", PreEolState.URGENT),
            ("00", PreEolState.UNDEFINED),
            ("04", PreEolState.UNDEFINED),
            ("xx", PreEolState.UNDEFINED),
            (None, PreEolState.UNAVAILABLE),
        ],
    )
    def test_states(self, text, state):
        assert interpret_pre_eol(text).state == state

    def test_absent_reads_not_available(self):
        assert interpret_pre_eol(None).description == "Not available"


class TestProjectLifespan:
    """Tests for project_lifespan."""

    def test_healthy_projection(self):
        projection = project_lifespan(58, 15, Decimal("1.02"))

        assert projection.tbw_max == 174000
        assert projection.remaining_pct == 85
        assert projection.tbw_remaining == 147900
        assert projection.cycles_used == 450
        assert projection.days_left == 145000
        assert projection.years_left == Decimal("397.2")

    def test_years_truncated(self):
        """Years are cut to one decimal, never rounded up."""
        projection = project_lifespan(1, 0, Decimal("1.00"), cycles_max=364)

        assert projection.days_left == 364
        assert str(projection.years_left) == "0.9"

    def test_zero_daily_rate_is_infinite(self):
        """Nothing written means an unbounded projection."""
        projection = project_lifespan(32, 40, Decimal("0.00"))

        assert projection.days_text == INFINITY
        assert projection.years_text == INFINITY

    def test_fully_worn_is_infinite(self):
        """No remaining endurance reports infinity instead of failing."""
        projection = project_lifespan(64, 100, Decimal("3.50"))

        assert projection.remaining_pct == 0
        assert projection.tbw_remaining == 0
        assert projection.days_left is None
        assert projection.years_text == INFINITY

    def test_unknown_capacity_is_infinite(self):
        projection = project_lifespan(0, 10, Decimal("1.00"))

        assert projection.tbw_max == 0
        assert projection.days_left is None

    def test_custom_cycles(self):
        projection = project_lifespan(10, 50, Decimal("5.00"), cycles_max=10000)

        assert projection.tbw_max == 100000
        assert projection.cycles_used == 5000
        assert projection.days_left == 10000


class TestHealth:
    """Tests for assess_health and recommend."""

    def test_scenario_excellent(self):
        """30% wear with Pre-EOL normal is excellent with the normal guidance."""
        assert assess_health(30, PreEolState.NORMAL) == HealthStatus.EXCELLENT
        assert recommend(30).lines == RECOMMENDATION_LINES[RecommendationTier.NORMAL]
        assert "Device is in excellent condition" in recommend(30).lines

    @pytest.mark.parametrize(
        "avg,pre_eol,expected",
        [
            (50, PreEolState.NORMAL, HealthStatus.EXCELLENT),
            (51, PreEolState.NORMAL, HealthStatus.GOOD),
            (10, PreEolState.WARNING, HealthStatus.GOOD),
            (80, PreEolState.WARNING, HealthStatus.GOOD),
            (81, PreEolState.NORMAL, HealthStatus.ATTENTION_REQUIRED),
            (10, PreEolState.URGENT, HealthStatus.ATTENTION_REQUIRED),
            (10, PreEolState.UNDEFINED, HealthStatus.ATTENTION_REQUIRED),
            (10, PreEolState.UNAVAILABLE, HealthStatus.ATTENTION_REQUIRED),
        ],
    )
    def test_classification(self, avg, pre_eol, expected):
        assert assess_health(avg, pre_eol) == expected

    @pytest.mark.parametrize("pre_eol", list(PreEolState))
    def test_monotonic_in_wear(self, pre_eol):
        """Higher wear never yields a better status."""
        rank = {
            HealthStatus.EXCELLENT: 0,
            HealthStatus.GOOD: 1,
            HealthStatus.ATTENTION_REQUIRED: 2,
        }
        ranks = [rank[assess_health(avg, pre_eol)] for avg in range(0, 101)]

        assert ranks == sorted(ranks)

    def test_custom_thresholds(self):
        assert assess_health(40, PreEolState.NORMAL, 30, 60) == HealthStatus.GOOD
        assert assess_health(61, PreEolState.NORMAL, 30, 60) == HealthStatus.ATTENTION_REQUIRED

    @pytest.mark.parametrize(
        "avg,tier",
        [
            (0, RecommendationTier.NORMAL),
            (50, RecommendationTier.NORMAL),
            (51, RecommendationTier.MONITOR),
            (80, RecommendationTier.MONITOR),
            (81, RecommendationTier.REPLACE),
            (100, RecommendationTier.REPLACE),
        ],
    )
    def test_recommendation_tiers(self, avg, tier):
        assert recommend(avg).tier == tier

    def test_label(self):
        assert HealthStatus.ATTENTION_REQUIRED.label == "Attention Required"


class TestBuildAnalysis:
    """Tests for build_analysis."""

    def test_healthy_device(self):
        analysis = build_analysis(
            Device("mmcblk0", 58),
            stats(),
            LifetimeEstimate(a_hex="01", b_hex="02", pre_eol_hex="01"),
        )

        assert analysis.health == HealthStatus.EXCELLENT
        assert analysis.projection.days_left == 145000
        assert analysis.uptime_days == Decimal("1.0")
        assert analysis.write_time_seconds == Decimal("25.0")
        assert analysis.recommendations.tier == RecommendationTier.NORMAL

    def test_worn_device(self):
        analysis = build_analysis(
            Device("mmcblk0", 58),
            stats(),
            LifetimeEstimate(a_hex="09", b_hex="0B", pre_eol_hex="02"),
        )

        assert (analysis.wear.a_pct, analysis.wear.b_pct, analysis.wear.avg_pct) == (90, 100, 95)
        assert analysis.health == HealthStatus.ATTENTION_REQUIRED
        assert analysis.recommendations.tier == RecommendationTier.REPLACE

    def test_config_applies(self):
        config = Config(cycles_max=1000, wear_threshold_warning=10, wear_threshold_critical=20)
        analysis = build_analysis(
            Device("mmcblk0", 58),
            stats(),
            LifetimeEstimate(a_hex="01", b_hex="02", pre_eol_hex="01"),
            config,
        )

        assert analysis.projection.tbw_max == 58000
        assert analysis.health == HealthStatus.GOOD
        assert analysis.recommendations.tier == RecommendationTier.MONITOR

    def test_truncation_helpers(self):
        assert truncate(Decimal("1.99")) == Decimal("1.9")
        assert truncate(Decimal("12.345"), Decimal("0.01")) == Decimal("12.34")
