"""
Tests for the progress calculator.
"""
import pytest

from domain.models import ExerciseType, SupersetType, WorkoutSet
from engine.core.progress import (
    calculate_progress,
    calculate_workout_stats,
    get_superset_progress,
    is_superset_complete,
)
from tests.fakes import make_exercise, make_superset


@pytest.mark.unit
class TestSupersetCompletion:
    """Tests for is_superset_complete() and get_superset_progress()."""

    def test_triset_with_zero_reps_is_not_complete(self):
        """All rounds done is not enough when one exercise has reps=0."""
        a = make_exercise("a", reps="12")
        b = make_exercise("b", reps="0")
        c = make_exercise("c", reps="12")
        triset = make_superset(
            "tri",
            [a, b, c],
            superset_type=SupersetType.TRISET,
            rounds=3,
            round_completed=[True, True, True],
        )
        assert is_superset_complete(triset) is False

    def test_complete_when_configured_and_all_rounds_done(self):
        ss = make_superset(
            "ss",
            [make_exercise("a"), make_exercise("b")],
            rounds=2,
            round_completed=[True, True],
        )
        assert is_superset_complete(ss) is True

    def test_not_complete_with_rounds_pending(self):
        ss = make_superset("ss", [make_exercise("a"), make_exercise("b")], rounds=2, round_completed=[True])
        assert is_superset_complete(ss) is False

    def test_exercise_without_sets_is_not_complete(self):
        ss = make_superset("ss", [make_exercise("a"), make_exercise("b", sets=0)], rounds=1, round_completed=[True])
        assert is_superset_complete(ss) is False

    def test_timed_exercise_uses_duration(self):
        timed = make_exercise("plank", exercise_type=ExerciseType.TIME, duration="45")
        ss = make_superset(
            "c",
            [timed, make_exercise("a"), make_exercise("b")],
            superset_type=SupersetType.CIRCUIT,
            rounds=1,
            round_completed=[True],
        )
        assert is_superset_complete(ss) is True

    def test_superset_progress_forty_percent(self):
        ss = make_superset(
            "ss",
            [make_exercise("a"), make_exercise("b")],
            rounds=5,
            round_completed=[True, True, False, False, False],
        )
        assert get_superset_progress(ss) == 40.0

    def test_superset_progress_non_decreasing(self):
        ss = make_superset("ss", [make_exercise("a"), make_exercise("b")], rounds=4)
        previous = get_superset_progress(ss)
        for round_number in range(1, 5):
            ss = ss.mark_round_completed(round_number)
            current = get_superset_progress(ss)
            assert current >= previous
            previous = current
        assert previous == 100.0


@pytest.mark.unit
class TestCalculateProgress:
    """Tests for calculate_progress() and workout stats."""

    def test_empty_workout_is_zero(self):
        assert calculate_progress([], []) == 0.0

    def test_rounds_weighted_by_exercise_count(self):
        """A superset round counts as one set per member exercise."""
        standalone = make_exercise("solo", sets=4).with_set(0, WorkoutSet(reps="10", completed=True))
        ss = make_superset(
            "ss",
            [make_exercise("a"), make_exercise("b")],
            rounds=3,
            round_completed=[True, False, False],
        )
        # total = 4 + 3 * 2 = 10, completed = 1 + 1 * 2 = 3
        assert calculate_progress([standalone], [ss]) == pytest.approx(30.0)

    def test_grouped_exercises_not_counted_twice(self):
        a, b = make_exercise("a", sets=3), make_exercise("b", sets=3)
        ss = make_superset("ss", [a, b], rounds=2, round_completed=[True, True])
        assert calculate_progress([a, b], [ss]) == 100.0

    def test_workout_stats_use_same_formula(self):
        standalone = make_exercise("solo", sets=2)
        ss = make_superset("ss", [make_exercise("a"), make_exercise("b")], rounds=2, round_completed=[True])
        stats = calculate_workout_stats([standalone], [ss])
        assert stats.total_exercises == 1
        assert stats.total_supersets == 1
        assert stats.total_sets == 6
        assert stats.completed_sets == 2
        assert stats.progress_percentage == pytest.approx(calculate_progress([standalone], [ss]))
