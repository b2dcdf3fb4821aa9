"""
Unit tests for the readiness transform.

Tests the linear score → percent mapping, the per-muscle banding table,
the red colour gradient and the history-aware (body-map) variant.
"""

import datetime

import pytest

from app.recovery.policy import RecoveryPolicy
from app.recovery.readiness import (
    AVERAGE_READINESS_BANDS,
    GRADIENT_STOPS,
    MUSCLE_READINESS_BANDS,
    band_for,
    build_readiness,
    interpolate_segment,
    percent_from_history,
    percent_from_recovery_load,
    percent_from_score,
    readiness_color,
    readiness_for_muscle,
    readiness_from_fatigue_score,
)
from app.schemas.fatigue import MuscleFatigue

NOW = datetime.datetime(2026, 10, 19, 12, 0, tzinfo=datetime.timezone.utc)


# ======================================================================
# Helpers
# ======================================================================


def _make_muscle(score: float = 100.0, **overrides) -> MuscleFatigue:
    fields = dict(
        muscle_group="chest",
        last_7_days_volume=1000.0,
        baseline_volume=1000.0,
        fatigue_score=score,
        status="optimal",
    )
    fields.update(overrides)
    return MuscleFatigue(**fields)


# ======================================================================
# percent_from_score
# ======================================================================


class TestPercentFromScore:
    """Test the linear fallback transform."""

    def test_reference_point(self):
        """Score 70 maps to fully rested."""
        assert percent_from_score(70) == 100

    @pytest.mark.parametrize("score,expected", [
        (0, 100),
        (70, 100),
        (90, 96),
        (100, 84),
        (110, 72),
        (120, 60),
        (150, 24),
        (153, 20),
        (170, 0),
        (400, 0),
    ])
    def test_known_values(self, score, expected):
        assert percent_from_score(score) == expected

    @pytest.mark.parametrize("score", [
        -1e6, -100, -0.5, 0, 12.3, 69.9, 70, 70.1, 99.5, 153.33, 186.6, 250, 1e6,
    ])
    def test_always_within_bounds(self, score):
        assert 0 <= readiness_from_fatigue_score(score).percent <= 100

    def test_monotonic_non_increasing(self):
        percents = [percent_from_score(s) for s in range(0, 250, 5)]
        assert percents == sorted(percents, reverse=True)

    def test_halves_round_up(self):
        """120 - (s - 70) * 1.2 = 50.5 rounds to 51."""
        policy = RecoveryPolicy(readiness_slope=1.0, readiness_offset=120.5)
        assert percent_from_score(140, policy) == 51

    def test_policy_override(self):
        policy = RecoveryPolicy(readiness_slope=2.0)
        assert percent_from_score(90, policy) == 80


# ======================================================================
# Banding
# ======================================================================


class TestMuscleBanding:
    """Per-muscle labels: Fresh / Ready / Caution / Fatigued."""

    @pytest.mark.parametrize("percent,label", [
        (100, "Fresh"),
        (85, "Fresh"),
        (84, "Ready"),
        (65, "Ready"),
        (64, "Caution"),
        (45, "Caution"),
        (44, "Fatigued"),
        (0, "Fatigued"),
    ])
    def test_thresholds(self, percent, label):
        assert build_readiness(percent).label == label

    def test_score_ninety_is_fresh(self):
        readiness = readiness_from_fatigue_score(90)
        assert readiness.percent == 96
        assert readiness.label == "Fresh"

    def test_tables_are_distinct_scales(self):
        muscle_labels = [b.label for b in MUSCLE_READINESS_BANDS]
        average_labels = [b.label for b in AVERAGE_READINESS_BANDS]
        assert muscle_labels != average_labels
        assert band_for(60, MUSCLE_READINESS_BANDS).label == "Caution"
        assert band_for(60, AVERAGE_READINESS_BANDS).label == "Rest recommended"

    def test_tables_ordered_top_down(self):
        for bands in (MUSCLE_READINESS_BANDS, AVERAGE_READINESS_BANDS):
            bounds = [b.lower_bound for b in bands]
            assert bounds == sorted(bounds, reverse=True)
            assert bounds[-1] == 0


# ======================================================================
# Colour gradient
# ======================================================================


class TestReadinessColor:
    """Test the four-segment red gradient."""

    def test_endpoints(self):
        assert readiness_color(0) == "rgba(255, 0, 0, 0.9)"
        assert readiness_color(100) == "rgba(255, 230, 230, 0.4)"

    def test_segment_boundaries(self):
        assert readiness_color(25) == "rgba(255, 51, 51, 0.85)"
        assert readiness_color(50) == "rgba(255, 102, 102, 0.75)"
        assert readiness_color(75) == "rgba(255, 179, 179, 0.6)"

    def test_midpoint_interpolation(self):
        assert readiness_color(12.5) == "rgba(255, 26, 26, 0.875)"

    @pytest.mark.parametrize("index", [0, 1, 2])
    def test_continuous_at_shared_boundary(self, index):
        """Both neighbouring segments evaluate to the same RGBA at the boundary."""
        boundary = GRADIENT_STOPS[index + 1].percent
        assert interpolate_segment(index, boundary) == interpolate_segment(index + 1, boundary)

    def test_out_of_range_is_clamped(self):
        assert readiness_color(-20) == readiness_color(0)
        assert readiness_color(180) == readiness_color(100)

    def test_readiness_carries_gradient_color(self):
        readiness = readiness_from_fatigue_score(150)
        assert readiness.color == readiness_color(readiness.percent)


# ======================================================================
# Recovery load & history variants
# ======================================================================


class TestRecoveryLoad:
    """A finite recovery load takes precedence over everything else."""

    @pytest.mark.parametrize("load,expected", [
        (0.0, 100),
        (0.25, 75),
        (1.0, 0),
        (1.5, 0),
        (-1.0, 100),
    ])
    def test_percent(self, load, expected):
        assert percent_from_recovery_load(load) == expected

    def test_overrides_history(self):
        readiness = readiness_from_fatigue_score(
            200, NOW - datetime.timedelta(hours=1),
            last_session_sets=10, recovery_load=0.1, now=NOW,
        )
        assert readiness.percent == 90

    def test_non_finite_load_falls_back(self):
        readiness = readiness_from_fatigue_score(90, recovery_load=float("nan"))
        assert readiness.percent == 96


class TestPercentFromHistory:
    """Recovery curve anchored at the last session."""

    def test_heavy_session_recovers_linearly(self):
        """6 sets → intensity 1 → starts at 0 %, recovers over 96 h."""
        percent = percent_from_history(
            150, NOW - datetime.timedelta(hours=24),
            last_session_sets=6, now=NOW,
        )
        assert percent == 25

    def test_fully_recovered_after_window(self):
        percent = percent_from_history(
            150, NOW - datetime.timedelta(hours=200),
            last_session_sets=3, now=NOW,
        )
        assert percent == 100

    def test_volume_relative_to_baseline(self):
        """2000 / (10000 × 0.4) = 0.5 intensity → 50 % start, 54 h window."""
        percent = percent_from_history(
            150, NOW - datetime.timedelta(hours=27),
            last_session_sets=1, last_session_volume=2000.0,
            baseline_weekly_volume=10000.0, now=NOW,
        )
        assert percent == 75

    def test_future_session_falls_back_to_score(self):
        percent = percent_from_history(
            90, NOW + datetime.timedelta(hours=5),
            last_session_sets=6, now=NOW,
        )
        assert percent == 96

    def test_no_measurable_load_falls_back_to_score(self):
        percent = percent_from_history(
            90, NOW - datetime.timedelta(hours=2),
            last_session_sets=0, last_session_volume=0.0, now=NOW,
        )
        assert percent == 96

    def test_naive_datetime_treated_as_utc(self):
        naive = (NOW - datetime.timedelta(hours=24)).replace(tzinfo=None)
        percent = percent_from_history(150, naive, last_session_sets=6, now=NOW)
        assert percent == 25


class TestReadinessForMuscle:
    """List view ignores recency; body map uses it."""

    def test_list_view_uses_score_only(self):
        muscle = _make_muscle(
            score=90,
            last_trained_at=NOW - datetime.timedelta(hours=1),
            last_session_sets=8,
        )
        assert readiness_for_muscle(muscle).percent == 96

    def test_body_map_uses_history(self):
        muscle = _make_muscle(
            score=90,
            last_trained_at=NOW - datetime.timedelta(hours=24),
            last_session_sets=6,
        )
        assert readiness_for_muscle(muscle, use_history=True, now=NOW).percent == 25

    def test_body_map_without_history_matches_list(self):
        muscle = _make_muscle(score=120)
        assert (
            readiness_for_muscle(muscle, use_history=True, now=NOW)
            == readiness_for_muscle(muscle)
        )
