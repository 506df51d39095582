"""Verify all modules can be imported without errors."""
import pytest

# All tests in this module are pure import checks - mark as unit tests
pytestmark = pytest.mark.unit


def test_domain_imports():
    """Import domain models and converters."""
    import domain.models
    import domain.models.exercise
    import domain.models.progression
    import domain.models.station
    import domain.models.superset
    import domain.models.workout
    import domain.models.workout_set
    import domain.converters
    import domain.converters.db_converters
    import domain.converters.session_payload


def test_application_imports():
    """Import ports and use cases."""
    import application.ports
    import application.ports.runtime
    import application.ports.session_listener
    import application.ports.workout_repository
    import application.use_cases
    import application.use_cases.complete_workout
    import application.use_cases.load_session


def test_engine_imports():
    """Import engine core modules."""
    import engine.settings
    import engine.cli
    import engine.core.gym_session
    import engine.core.haptic_patterns
    import engine.core.progress
    import engine.core.progression_controller
    import engine.core.runtime
    import engine.core.station_sequencer
    import engine.core.superset_builder
    import engine.core.timers
    import engine.core.workout_metrics


def test_infrastructure_imports():
    """Import infrastructure modules."""
    import infrastructure
    import infrastructure.db
    import infrastructure.db.client
    import infrastructure.db.workout_repository
