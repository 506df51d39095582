"""
Application layer of the workout progression engine.

This package contains:
- ports/: Protocol interfaces the engine depends on (listener, runtime, storage)
- use_cases/: Workflows opening and completing stored workouts
"""
