"""Unit tests for the score formula and intensity mapping."""

import pytest

from dayflow.services.scoring import compute_intensity, compute_score


class TestScore:
    def test_weighted_sum(self):
        score = compute_score(
            tasks_completed=3,
            focus_minutes=52,
            habits_completed=1,
            notes_created=2,
            schedule_events_completed=0,
        )
        assert score == 11.5

    def test_only_full_focus_blocks_count(self):
        assert compute_score(focus_minutes=24) == 0
        assert compute_score(focus_minutes=25) == 1
        assert compute_score(focus_minutes=74) == 2

    def test_half_point_weights(self):
        assert compute_score(habits_completed=1, schedule_events_completed=1) == 3.0

    def test_empty_day(self):
        assert compute_score() == 0


class TestColdStartIntensity:
    @pytest.mark.parametrize(
        "score, expected",
        [(0, 0), (2.9, 1), (3, 2), (5.9, 2), (6, 3), (9.9, 3), (10, 4), (40, 4)],
    )
    def test_fixed_thresholds(self, score, expected):
        assert compute_intensity(score, []) == expected

    def test_four_active_days_is_still_cold(self):
        assert compute_intensity(10, [100, 100, 100, 100]) == 4


class TestWarmIntensity:
    BASELINE = [8, 8, 8, 8, 8]

    @pytest.mark.parametrize(
        "score, expected",
        [(0, 0), (3.9, 1), (4, 2), (7.9, 2), (8, 3), (11.9, 3), (12, 4)],
    )
    def test_relative_to_average(self, score, expected):
        assert compute_intensity(score, self.BASELINE) == expected

    def test_uneven_history_uses_mean(self):
        # mean of 2, 4, 6, 8, 10 is 6
        assert compute_intensity(2.9, [2, 4, 6, 8, 10]) == 1
        assert compute_intensity(8.9, [2, 4, 6, 8, 10]) == 3
        assert compute_intensity(9, [2, 4, 6, 8, 10]) == 4

    def test_power_user_needs_more_for_same_level(self):
        assert compute_intensity(10, []) == 4
        assert compute_intensity(10, [30] * 5) == 1
