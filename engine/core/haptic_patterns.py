"""Vibration patterns (ms) used for session feedback."""

TAP = 100
REJECTED = 100
ROUND_COMPLETED = (0, 200, 100, 200)
REST_FINISHED = (0, 200, 100, 200)
WORKOUT_FINISHED = (0, 200, 100, 200, 100, 200)
TIMER_PAUSED = (0, 100, 50, 100)
TARGET_REACHED = (0, 200, 100, 200, 100, 200)
