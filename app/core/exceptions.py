"""
Engine exceptions.

Only conditions that are real failures live here.  A missing baseline,
an empty snapshot or a template score below the match threshold are
ordinary outcomes and never raise.
"""


class RecoveryEngineError(Exception):
    """Base class for every error raised by the recovery engine."""

    code = "recovery_engine_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidSnapshotError(RecoveryEngineError):
    """A fatigue snapshot breaks a structural invariant (e.g. duplicate keys)."""

    code = "invalid_snapshot"


class WorkoutGenerationError(RecoveryEngineError):
    """The external AI generation call failed.

    ``message`` is safe to show to the user.  The original exception is
    chained as ``__cause__``.  Generation is never retried here.
    """

    code = "generation_failed"

    DEFAULT_MESSAGE = "Please try again."
    TITLE = "AI could not generate workout"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.DEFAULT_MESSAGE)
