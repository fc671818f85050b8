"""
Domain exceptions.

The tracking engine raises these for caller-side bugs (wrong state) and the
record store wraps persistence failures in RepositoryError. The HTTP layer
maps them to status codes in motra.api.
"""


class TrackingError(RuntimeError):
    """Base class for tracking session errors."""


class InvalidTransitionError(TrackingError):
    """A tracker operation was called from a state that does not allow it."""

    def __init__(self, operation: str, state):
        state_name = getattr(state, "value", state)
        super().__init__(f"cannot {operation} while {state_name}")
        self.operation = operation
        self.state = state


class AlreadyFinalizedError(TrackingError):
    """finalize() was called a second time for the same session."""


class RepositoryError(RuntimeError):
    """The workout record store failed to read or write."""


class WorkoutNotFoundError(LookupError):
    def __init__(self, workout_id: str):
        super().__init__(f"Workout not found: {workout_id}")
        self.workout_id = workout_id


class FileImportError(ValueError):
    """An uploaded GPX/FIT file could not be turned into a workout."""
