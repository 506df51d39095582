"""
Unit tests for domain models.

These tests verify:
- Model validation
- Model serialization/deserialization (camelCase aliases)
- Computed properties
- Domain methods returning new instances
"""

import pytest
from pydantic import ValidationError

from domain.models import (
    SUPERSET_TYPE_CONFIG,
    CatalogExercise,
    Exercise,
    ExerciseType,
    Feeling,
    GymSportSession,
    OtherSportSession,
    PostWorkoutData,
    ProgressionState,
    RestContext,
    Superset,
    SupersetType,
    Workout,
    WorkoutSet,
    create_empty_set,
    is_set_complete,
)


@pytest.mark.unit
class TestWorkoutSet:
    """Tests for the WorkoutSet value object and is_set_complete."""

    def test_numbers_are_stored_as_strings(self):
        """Numeric JSON values are kept the same way as typed input."""
        s = WorkoutSet(reps=10, weight=62.5)
        assert s.reps == "10"
        assert s.weight == "62.5"

    def test_boolean_values_are_rejected(self):
        with pytest.raises(ValidationError):
            WorkoutSet(reps=True)

    def test_actual_duration_alias(self):
        s = WorkoutSet.model_validate({"duration": "45", "actualDuration": 47})
        assert s.actual_duration == 47
        assert s.model_dump(by_alias=True)["actualDuration"] == 47

    def test_negative_actual_duration_rejected(self):
        with pytest.raises(ValidationError):
            WorkoutSet(actual_duration=-1)

    @pytest.mark.parametrize(
        "workout_set,exercise_type,expected",
        [
            (WorkoutSet(reps="10"), ExerciseType.REPETITIONS, True),
            (WorkoutSet(reps="0"), ExerciseType.REPETITIONS, False),
            (WorkoutSet(reps=""), ExerciseType.REPETITIONS, False),
            (WorkoutSet(reps="abc"), ExerciseType.REPETITIONS, False),
            (WorkoutSet(weight="100"), ExerciseType.REPETITIONS, False),
            (WorkoutSet(duration="45"), ExerciseType.TIME, True),
            (WorkoutSet(duration="0"), ExerciseType.TIME, False),
            (WorkoutSet(reps="10"), ExerciseType.TIME, False),
            (WorkoutSet(distance="1.5"), ExerciseType.DISTANCE, True),
            (WorkoutSet(distance="0.0"), ExerciseType.DISTANCE, False),
            (WorkoutSet(duration="600"), ExerciseType.DISTANCE, False),
        ],
    )
    def test_is_set_complete(self, workout_set, exercise_type, expected):
        """Only the field matching the type counts, and it must be > 0."""
        assert is_set_complete(workout_set, exercise_type) is expected

    def test_weight_is_never_required(self):
        assert is_set_complete(WorkoutSet(reps="8", weight=""), ExerciseType.REPETITIONS)

    def test_create_empty_set_shapes(self):
        """Empty sets carry the work fields of their exercise type."""
        reps = create_empty_set(ExerciseType.REPETITIONS)
        assert (reps.reps, reps.duration, reps.distance) == ("", None, None)

        timed = create_empty_set(ExerciseType.TIME)
        assert (timed.reps, timed.duration) == (None, "")

        distance = create_empty_set(ExerciseType.DISTANCE)
        assert (distance.distance, distance.duration) == ("", "")
        assert distance.weight == "" and distance.notes == ""
        assert distance.completed is False


@pytest.mark.unit
class TestExerciseType:
    """Tests for the ExerciseType enum."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Repeticiones", ExerciseType.REPETITIONS),
            ("Tiempo", ExerciseType.TIME),
            ("Distancia", ExerciseType.DISTANCE),
            ("time", ExerciseType.TIME),
            ("Repetitions", ExerciseType.REPETITIONS),
        ],
    )
    def test_legacy_and_lowercase_tags(self, raw, expected):
        assert ExerciseType(raw) is expected

    def test_unknown_tag_rejected(self):
        with pytest.raises(ValueError):
            ExerciseType("Swim")


@pytest.mark.unit
class TestExercise:
    """Tests for the Exercise value object."""

    def test_defaults(self):
        ex = Exercise(id="ex1", name="Squat")
        assert ex.rest_time == "60"
        assert ex.rest_seconds == 60
        assert ex.exercise_type == ExerciseType.REPETITIONS
        assert ex.sets == []

    def test_camel_case_payload(self):
        """Exercises written by the mobile app parse with their aliases."""
        ex = Exercise.model_validate(
            {
                "id": "gym_ex_1",
                "exerciseId": "plank",
                "name": "Plank",
                "sets": [{"duration": "60", "weight": ""}],
                "restTime": 30,
                "exerciseType": "Tiempo",
                "muscleGroup": "Core",
            }
        )
        assert ex.exercise_id == "plank"
        assert ex.rest_time == "30"
        assert ex.is_timed
        assert ex.muscle_group == "Core"

    def test_rest_seconds_falls_back_on_garbage(self):
        assert Exercise(id="e", name="E", rest_time="soon").rest_seconds == 60
        assert Exercise(id="e", name="E", rest_time="").rest_seconds == 60

    def test_missing_type_means_repetitions(self):
        ex = Exercise.model_validate({"id": "e", "name": "E", "exerciseType": None})
        assert ex.exercise_type == ExerciseType.REPETITIONS

    def test_with_set_returns_new_instance(self):
        ex = Exercise(id="e", name="E", sets=[WorkoutSet(reps="5"), WorkoutSet(reps="5")])
        updated = ex.with_set(1, WorkoutSet(reps="5", completed=True))
        assert ex.sets[1].completed is False
        assert updated.sets[1].completed is True
        assert updated.completed_sets == 1

    def test_frozen(self):
        ex = Exercise(id="e", name="E")
        with pytest.raises(ValidationError):
            ex.name = "Other"

    def test_volume_and_max_weight_count_completed_sets_only(self):
        ex = Exercise(
            id="e",
            name="Bench",
            sets=[
                WorkoutSet(reps="10", weight="60", completed=True),
                WorkoutSet(reps="8", weight="70", completed=True),
                WorkoutSet(reps="6", weight="80", completed=False),
            ],
        )
        assert ex.volume == 10 * 60 + 8 * 70
        assert ex.max_weight == 70

    def test_total_duration_prefers_measured_time(self):
        ex = Exercise(
            id="e",
            name="Plank",
            exercise_type=ExerciseType.TIME,
            sets=[
                WorkoutSet(duration="60", actual_duration=58, completed=True),
                WorkoutSet(duration="60", completed=True),
                WorkoutSet(duration="60"),
            ],
        )
        assert ex.total_duration == 118

    def test_from_catalog(self):
        catalog = CatalogExercise(
            id="deadlift", name="Deadlift", muscle_group="Back", equipment="Barbell"
        )
        ex = Exercise.from_catalog(
            catalog, instance_id="gym_ex_9", sets=[create_empty_set(ExerciseType.REPETITIONS)]
        )
        assert ex.id == "gym_ex_9"
        assert ex.exercise_id == "deadlift"
        assert ex.equipment == "Barbell"
        assert ex.rest_time == "60"
        assert ex.notes == ""


@pytest.mark.unit
class TestSuperset:
    """Tests for the Superset value object and type configuration."""

    def _exercises(self, n):
        return [Exercise(id=f"e{i}", name=f"E{i}", sets=[WorkoutSet(reps="10")]) for i in range(n)]

    def test_type_config_bounds(self):
        assert SUPERSET_TYPE_CONFIG[SupersetType.SUPERSET].min_exercises == 2
        assert SUPERSET_TYPE_CONFIG[SupersetType.SUPERSET].max_exercises == 2
        assert SUPERSET_TYPE_CONFIG[SupersetType.TRISET].accepts_count(3)
        assert not SUPERSET_TYPE_CONFIG[SupersetType.CIRCUIT].accepts_count(9)
        assert SUPERSET_TYPE_CONFIG[SupersetType.MEGACIRCUIT].accepts_count(12)
        assert SupersetType.CIRCUIT.config.has_exercise_rest
        assert not SupersetType.TRISET.config.allow_timed_sets

    def test_round_completed_padded_to_total_rounds(self):
        ss = Superset(id="s", name="S", exercises=self._exercises(2), total_rounds=4)
        assert ss.round_completed == [False, False, False, False]

        partial = Superset(
            id="s", name="S", exercises=self._exercises(2), total_rounds=3, round_completed=[True]
        )
        assert partial.round_completed == [True, False, False]

    def test_round_completed_longer_than_rounds_rejected(self):
        with pytest.raises(ValidationError):
            Superset(
                id="s",
                name="S",
                exercises=self._exercises(2),
                total_rounds=2,
                round_completed=[True, True, True],
            )

    def test_zero_rounds_rejected(self):
        with pytest.raises(ValidationError):
            Superset(id="s", name="S", exercises=self._exercises(2), total_rounds=0)

    def test_current_round_cannot_exceed_total(self):
        with pytest.raises(ValidationError):
            Superset(id="s", name="S", exercises=self._exercises(2), total_rounds=2, current_round=3)

    def test_mark_round_completed(self):
        ss = Superset(id="s", name="S", exercises=self._exercises(2), total_rounds=3)
        updated = ss.mark_round_completed(2)
        assert updated.round_completed == [False, True, False]
        assert ss.round_completed == [False, False, False]
        assert updated.completed_rounds == 1
        assert ss.mark_round_completed(4) is ss

    def test_with_rounds_resizes_flags(self):
        ss = Superset(
            id="s",
            name="S",
            exercises=self._exercises(2),
            total_rounds=3,
            round_completed=[True, True],
            current_round=3,
        )

        shorter = ss.with_rounds(1)
        assert shorter.total_rounds == 1
        assert shorter.round_completed == [True]
        assert shorter.current_round == 1

        longer = ss.with_rounds(5)
        assert longer.round_completed == [True, True, False, False, False]
        assert longer.current_round == 3

    def test_with_rounds_rejects_zero(self):
        ss = Superset(id="s", name="S", exercises=self._exercises(2), total_rounds=2)
        with pytest.raises(ValueError):
            ss.with_rounds(0)

    def test_rest_seconds(self):
        circuit = Superset(
            id="c",
            name="C",
            type=SupersetType.CIRCUIT,
            exercises=self._exercises(3),
            total_rounds=2,
            rest_time_between_rounds=120,
            rest_time_between_exercises="20",
        )
        assert circuit.round_rest_seconds == 120
        assert circuit.exercise_rest_seconds == 20

        superset = Superset(
            id="s",
            name="S",
            exercises=self._exercises(2),
            total_rounds=2,
            rest_time_between_rounds="",
            rest_time_between_exercises="30",
        )
        assert superset.round_rest_seconds == 90
        assert superset.exercise_rest_seconds == 0

    def test_camel_case_round_trip(self):
        ss = Superset(id="s", name="S", exercises=self._exercises(2), total_rounds=2)
        payload = ss.model_dump(mode="json", by_alias=True)
        assert payload["totalRounds"] == 2
        assert payload["roundCompleted"] == [False, False]
        assert Superset.model_validate(payload) == ss


@pytest.mark.unit
class TestProgressionState:
    """Tests for ProgressionState."""

    def test_initial_state(self):
        assert ProgressionState.initial().as_tuple() == (0, 0, 0, 1)

    def test_at_station_resets_inner_position(self):
        state = ProgressionState(station_index=1, exercise_in_superset=2, set_index=0, round=3)
        assert state.at_station(2).as_tuple() == (2, 0, 0, 1)

    def test_rest_context_labels(self):
        assert RestContext.ROUND.label == "Rest between rounds"


@pytest.mark.unit
class TestWorkoutRecord:
    """Tests for the persisted Workout record and its session payload."""

    def test_gym_session_payload(self):
        workout = Workout.model_validate(
            {
                "id": "w1",
                "date": "2026-10-16",
                "sport": "gym",
                "session": {
                    "sport": "gym",
                    "data": {
                        "exercises": [{"id": "e1", "name": "Squat", "sets": [{"reps": "5"}]}],
                        "supersets": [],
                    },
                },
            }
        )
        assert isinstance(workout.session, GymSportSession)
        assert workout.is_gym
        assert workout.session.data.exercises[0].name == "Squat"

    def test_legacy_bare_exercise_list(self):
        """Older payloads store the exercise list directly under data."""
        session = GymSportSession.model_validate(
            {"sport": "gym", "data": [{"id": "e1", "name": "Row", "sets": []}]}
        )
        assert [ex.id for ex in session.data.exercises] == ["e1"]
        assert session.data.supersets == []

    def test_other_sport_session(self):
        workout = Workout.model_validate(
            {
                "id": "w2",
                "date": "2026-10-16",
                "sport": "running",
                "session": {"sport": "running", "data": {"distance": "5"}},
            }
        )
        assert isinstance(workout.session, OtherSportSession)
        assert not workout.is_gym

    def test_mark_completed(self):
        workout = Workout(id="w1", date="2026-10-16")
        post = PostWorkoutData(rpe=8, feeling="tired", notes="  heavy day  ")
        completed = workout.mark_completed(post_workout=post, duration_minutes=55)
        assert completed.completed is True
        assert completed.completed_at is not None
        assert completed.updated_at == completed.completed_at
        assert completed.duration == 55
        assert completed.post_workout_data.notes == "heavy day"
        assert workout.completed is False


@pytest.mark.unit
class TestPostWorkoutData:
    """Tests for post-workout intensity data."""

    def test_defaults(self):
        data = PostWorkoutData()
        assert data.rpe == 5
        assert data.feeling == Feeling.GOOD
        assert data.notes is None

    @pytest.mark.parametrize("rpe", [0, 11])
    def test_rpe_bounds(self, rpe):
        with pytest.raises(ValidationError):
            PostWorkoutData(rpe=rpe)

    def test_blank_notes_become_none(self):
        assert PostWorkoutData(notes="   ").notes is None

    def test_rpe_label(self):
        assert PostWorkoutData(rpe=1).rpe_label == "Very easy"
