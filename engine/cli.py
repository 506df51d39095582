import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from pydantic import ValidationError

from domain.converters import session_to_lists, workout_session_lists
from domain.models import Exercise, ExerciseType, Superset, SupersetStation, Workout
from engine.core.gym_session import GymSession
from engine.core.progress import calculate_progress, get_superset_progress, is_superset_complete
from engine.core.runtime import ImmediateScheduler, LoggingHaptics, MonotonicClock
from engine.core.station_sequencer import build_stations
from engine.core.workout_metrics import calculate_superset_duration, format_time
from engine.settings import get_settings

logger = logging.getLogger(__name__)

# Values written into empty sets by `simulate`
SIMULATED_TARGETS = {
    ExerciseType.REPETITIONS: ("reps", "10"),
    ExerciseType.TIME: ("duration", "30"),
    ExerciseType.DISTANCE: ("distance", "1"),
}


def load_lists(path: str) -> Tuple[List[Exercise], List[Superset]]:
    """Read a Workout record (or a bare gym session payload) from a JSON file."""
    with open(path, "r") as f:
        payload = json.load(f)
    if isinstance(payload, dict) and "id" not in payload and "data" in payload:
        return session_to_lists(payload)
    return workout_session_lists(Workout.model_validate(payload))


def cmd_plan(exercises: List[Exercise], supersets: List[Superset]) -> None:
    stations = build_stations(exercises, supersets)
    if not stations:
        print("Empty workout")
        return
    for idx, station in enumerate(stations, start=1):
        if isinstance(station, SupersetStation):
            ss = station.data
            names = ", ".join(ex.name for ex in ss.exercises)
            print(
                f"{idx}. [{ss.type.value}] {ss.name} x{ss.total_rounds} rounds "
                f"(~{format_time(int(calculate_superset_duration(ss)))}): {names}"
            )
        else:
            ex = station.data
            print(f"{idx}. [exercise] {ex.name}: {len(ex.sets)} sets, rest {ex.rest_seconds}s")


def cmd_simulate(exercises: List[Exercise], supersets: List[Superset]) -> int:
    settings = get_settings()
    session = GymSession(
        exercises,
        supersets,
        clock=MonotonicClock(),
        scheduler=ImmediateScheduler(),
        haptics=LoggingHaptics(),
        settings=settings,
    )
    controller = session.start_active_workout()
    if controller is None:
        print("Nothing to perform: add exercises and sets first", file=sys.stderr)
        return 1

    # Every completion advances at least one step; bound the loop anyway
    max_steps = sum(len(ex.sets) for ex in exercises) + sum(
        ss.total_rounds * len(ss.exercises) for ss in supersets
    )
    steps = 0
    while not controller.finished and steps <= max_steps:
        exercise = controller.current_exercise
        if exercise is not None and controller.current_set is not None:
            field_name, value = SIMULATED_TARGETS[exercise.exercise_type]
            if not controller.complete_current_set():
                controller.update_current_set(field_name, value)
                if not controller.complete_current_set():
                    logger.warning(f"Could not complete a set of '{exercise.name}'")
                    if not controller.navigate_to_next_station():
                        break
        elif not controller.navigate_to_next_station():
            break
        steps += 1

    for event in controller.rest_events:
        print(f"rest {event.duration_seconds}s ({event.context.value})")
    print(f"Progress: {controller.progress:.1f}%")
    print("Finished" if controller.finished else "Stopped before the end")
    return 0


def cmd_progress(exercises: List[Exercise], supersets: List[Superset]) -> None:
    print(f"Session progress: {calculate_progress(exercises, supersets):.1f}%")
    for ss in supersets:
        status = "complete" if is_superset_complete(ss) else f"{ss.completed_rounds}/{ss.total_rounds} rounds"
        print(f"  {ss.name}: {get_superset_progress(ss):.1f}% ({status})")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect and simulate gym workouts")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("plan", "Print the station traversal of a workout"),
        ("simulate", "Run the progression engine through the whole workout"),
        ("progress", "Print session and superset progress"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input", help="Workout JSON file path")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        exercises, supersets = load_lists(args.input)
    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        return 1
    except (ValidationError, ValueError) as e:
        print(f"Error: Invalid workout: {e}", file=sys.stderr)
        return 1

    if args.command == "plan":
        cmd_plan(exercises, supersets)
    elif args.command == "simulate":
        return cmd_simulate(exercises, supersets)
    else:
        cmd_progress(exercises, supersets)
    return 0


if __name__ == "__main__":
    sys.exit(main())
