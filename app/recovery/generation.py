"""
AI workout generation glue.

The generation endpoint itself is external: it takes a free-text
instruction and returns a workout.  This module builds the instruction
and turns any failure of the call into a
:class:`~app.core.exceptions.WorkoutGenerationError` carrying a message
fit for the user.  Failed calls are not retried.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from app.core.exceptions import WorkoutGenerationError
from app.recovery.muscles import format_muscle_group
from app.recovery.templates import select_target_muscles
from app.schemas.fatigue import MuscleFatigue

logger = logging.getLogger(__name__)

INSTRUCTION_SEPARATOR = " | "
BASELINE_CLAUSE = "Stay near recent baseline volume"

WorkoutGenerator = Callable[[str], Any]


def build_generation_instruction(
    target_muscles: Optional[Sequence[str]],
    per_muscle: Sequence[MuscleFatigue],
) -> str:
    """Join the applicable clauses into the instruction string.

    ``Prioritize: …`` lists the target muscles, ``Limit volume for: …``
    the fatigued ones; the baseline clause is always present.  With
    *target_muscles* of ``None`` the targets are picked from *per_muscle*
    by :func:`~app.recovery.templates.select_target_muscles`.
    """
    if target_muscles is None:
        target_muscles = select_target_muscles(per_muscle)

    parts: list[str] = []
    if target_muscles:
        parts.append("Prioritize: " + ", ".join(format_muscle_group(m) for m in target_muscles))

    fatigued = [format_muscle_group(m.muscle_group) for m in per_muscle if m.fatigued]
    if fatigued:
        parts.append("Limit volume for: " + ", ".join(fatigued))

    parts.append(BASELINE_CLAUSE)
    return INSTRUCTION_SEPARATOR.join(parts)


def _user_message(exc: Exception) -> str | None:
    # Prefer a message the backend addressed to the user, if it sent one.
    message = getattr(exc, "user_message", None) or getattr(exc, "detail", None)
    if isinstance(message, str) and message.strip():
        return message
    return None


def generate_workout(generator: WorkoutGenerator, instruction: str) -> Any:
    """Call *generator* once with *instruction*.

    Raises:
        WorkoutGenerationError: the call failed; ``message`` is shown to
            the user and the original exception is chained.
    """
    try:
        return generator(instruction)
    except WorkoutGenerationError:
        raise
    except Exception as exc:
        logger.warning("Workout generation failed: %s", exc, exc_info=True)
        raise WorkoutGenerationError(_user_message(exc)) from exc
