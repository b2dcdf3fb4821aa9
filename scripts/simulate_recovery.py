"""What would the recovery view and the up-next card show TODAY?

Builds a fatigue snapshot from a week of sample per-muscle volumes,
prints the recovery overview and resolves the up-next card for a few
entitlement / template-match combinations.

Usage:
    python scripts/simulate_recovery.py
"""

import datetime

from app.core.logging_config import configure_logging
from app.recovery.generation import build_generation_instruction
from app.recovery.muscles import format_muscle_group
from app.recovery.overview import build_recovery_overview
from app.recovery.snapshot import build_fatigue_result
from app.recovery.templates import (
    build_training_recommendation,
    fatigue_status_for_split,
    generate_reasoning,
    rank_templates,
)
from app.recovery.up_next import resolve_up_next_card
from app.schemas.up_next import RecommendedSplit, TemplateCandidate, UpNextRecommendation

NOW = datetime.datetime(2026, 10, 19, 8, 0, tzinfo=datetime.timezone.utc)

# ─── Sample volumes (lbs) ───────────────────────────────────────────
LAST_7_DAYS = {
    "chest": 14200.0,
    "shoulders": 6100.0,
    "triceps": 3900.0,
    "back": 8000.0,
    "biceps": 1500.0,
    "legs": 21000.0,
    "glutes": 0.0,
}

# Four weeks of baseline, totalled.
BASELINE_TOTAL = {
    "chest": 40000.0,
    "shoulders": 22000.0,
    "triceps": 15000.0,
    "back": 36000.0,
    "biceps": 12000.0,
    "legs": 60000.0,
    "glutes": 8000.0,
}

TEMPLATES = [
    TemplateCandidate(template_id="t-push", template_name="Push Day A", split_type="push",
                      exercise_count=6, muscle_groups=["chest", "shoulders", "triceps"]),
    TemplateCandidate(template_id="t-pull", template_name="Back & Biceps", split_type=None,
                      exercise_count=5, muscle_groups=["lats", "upper back", "biceps"]),
    TemplateCandidate(template_id="t-legs", template_name="Leg Day", split_type="legs",
                      exercise_count=5, muscle_groups=["quadriceps", "hamstrings", "glutes"]),
]


def _print_header(title: str) -> None:
    print()
    print("=" * 65)
    print(f"  {title}")
    print("=" * 65)


def main():
    configure_logging()

    snapshot = build_fatigue_result(
        LAST_7_DAYS,
        BASELINE_TOTAL,
        last_workout_at=NOW - datetime.timedelta(days=1, hours=3),
        generated_at=NOW,
    )
    overview = build_recovery_overview(snapshot, now=NOW)

    _print_header(f"RECOVERY — {NOW.date().isoformat()}")
    print(f"  Average readiness: {overview.average_readiness}% ({overview.average_label})")
    print(f"  Deload week: {'yes' if overview.deload_week_detected else 'no'}")
    print(f"  Last workout: {overview.last_workout_days}d ago")
    print()
    for entry in overview.ranked:
        muscle = entry.muscle
        hint = f"  [{entry.hint}]" if entry.hint else ""
        print(
            f"  {format_muscle_group(muscle.muscle_group):<10} "
            f"score {muscle.fatigue_score:6.1f}  {muscle.status:<17} "
            f"{entry.readiness.percent:3d}% {entry.readiness.label}{hint}"
        )
    print()
    print(f"  {overview.guidance}")

    _print_header("HEATMAP")
    for region in overview.heatmap:
        print(f"  {region.slug:<12} ← {region.muscle_group:<10} bucket {region.intensity}")

    # ── Up next ──────────────────────────────────────────────────────
    for split_key, label in (("pull", "Pull"), ("arms", "Arms")):
        matched, alternates = rank_templates(TEMPLATES, split_key)
        fatigue_status = fatigue_status_for_split(snapshot, split_key)
        recommendation = UpNextRecommendation(
            recommended_split=RecommendedSplit(
                split_key=split_key, label=label, tags=["On-cycle", "Fresh", "Balanced"],
            ),
            matched_template=matched,
            alternate_templates=alternates,
            fatigue_status=fatigue_status,
            can_generate_ai=True,
            reasoning=generate_reasoning(label, ["On-cycle"], 4, fatigue_status, "ppl"),
            days_since_last_split=4,
        )
        for is_pro in (True, False):
            card = resolve_up_next_card(recommendation, is_pro=is_pro)
            _print_header(f"UP NEXT — {label} (pro={is_pro})")
            print(f"  {card.title}  |  {card.fatigue_label}")
            print(f"  {card.subtitle}")
            print(f"  Tags: {', '.join(card.tags) or '-'}")
            print(f"  Actions: {', '.join(a.kind + ('*' if a.primary else '') for a in card.actions)}")
            print(f"  {card.reasoning}")

    training = build_training_recommendation(snapshot, TEMPLATES)
    _print_header("TRAINING RECOMMENDATION")
    print(f"  Target: {', '.join(training.target_muscles) or '-'}")
    print(f"  Avoid:  {', '.join(training.avoid_muscles) or '-'}")
    for workout in training.recommended_workouts:
        print(f"  {workout.template_name:<22} {workout.reason}")

    _print_header("GENERATION REQUEST")
    print(f"  {build_generation_instruction(training.target_muscles, snapshot.per_muscle)}")


if __name__ == "__main__":
    main()
