"""
Up-next recommendation matcher.

Resolves the home-screen "up next" card into exactly one of four
states, checked in priority order:

1. ``loading``     — the recommendation fetch is in flight.
2. ``override``    — the user picked a template by hand; always shown,
                     with a Swap escape hatch.
3. ``empty``       — fetch failed or nothing was recommended; generic
                     onboarding call-to-action, independent of plan.
4. ``recommended`` — normal path.  A template counts as matched only if
                     ``match_score >= 85``; otherwise Generate / Create.

Generation entitlement
----------------------
``can_generate = is_pro or can_generate_ai``.  ``can_generate_ai`` is a
server-granted, one-time free generation for non-Pro users.  It is a
boolean re-read from the server on every fetch and never counted or
decremented here.
"""

from __future__ import annotations

import logging
from typing import Optional

from app.recovery.policy import DEFAULT_POLICY, RecoveryPolicy
from app.schemas.up_next import (
    CardAction,
    MatchedTemplate,
    OverrideTemplate,
    UpNextCard,
    UpNextCardRequest,
    UpNextRecommendation,
)

logger = logging.getLogger(__name__)

# Tags that repeat what the fatigue indicator already shows in the header.
FATIGUE_RELATED_TAGS: frozenset[str] = frozenset({"Fresh", "High fatigue risk", "Recovering"})

FATIGUE_LABELS: dict[str, str] = {
    "fresh": "Fresh",
    "ready": "Ready",
    "moderate-fatigue": "Recovering",
    "high-fatigue": "Fatigued",
    "no-data": "No data yet",
}

FATIGUE_COLORS: dict[str, str] = {
    "fresh": "#22c55e",
    "ready": "#38bdf8",
    "moderate-fatigue": "#fbbf24",
    "high-fatigue": "#ef4444",
    "no-data": "#94a3b8",
}


# ======================================================================
# Decision helpers
# ======================================================================


def has_matched_template(
    matched: Optional[MatchedTemplate],
    policy: RecoveryPolicy = DEFAULT_POLICY,
) -> bool:
    """True only for a populated template at or above the threshold (inclusive)."""
    return matched is not None and matched.match_score >= policy.template_match_threshold


def can_generate(is_pro: bool, can_generate_ai: bool) -> bool:
    """Whether tapping Generate triggers generation (else: upgrade flow)."""
    return is_pro or can_generate_ai


def filter_tags(tags: list[str], limit: Optional[int] = None) -> list[str]:
    """Drop fatigue-duplicating tags, keep order, cap at *limit*."""
    cap = DEFAULT_POLICY.max_split_tags if limit is None else limit
    return [tag for tag in tags if tag not in FATIGUE_RELATED_TAGS][:cap]


def _days_caption(days: Optional[int]) -> Optional[str]:
    if days is None or days <= 0:
        return None
    return f"{days}d since last"


# ======================================================================
# State builders
# ======================================================================


def _loading_card() -> UpNextCard:
    return UpNextCard(state="loading", title="Finding your next workout...")


def _override_card(override: OverrideTemplate) -> UpNextCard:
    subtitle = f"{override.exercise_count} exercises"
    if override.split_type:
        subtitle += f" • {override.split_type}"
    return UpNextCard(
        state="override",
        title=override.template_name,
        subtitle=subtitle,
        actions=[
            CardAction(kind="start", label="Start workout", primary=True,
                       template_id=override.template_id),
            CardAction(kind="edit", label="Edit", template_id=override.template_id),
            CardAction(kind="swap", label="Swap"),
        ],
        template=MatchedTemplate(
            template_id=override.template_id,
            template_name=override.template_name,
            exercise_count=override.exercise_count,
            match_score=100.0,
            match_reason="Manually selected",
            split_type=override.split_type,
        ),
        has_matched_template=True,
        footer="Tap Swap to choose a different workout",
    )


def _empty_card() -> UpNextCard:
    return UpNextCard(
        state="empty",
        title="No saved workouts yet",
        subtitle="Choose how to get started with your first workout.",
        actions=[CardAction(kind="get_started", label="Get Started", primary=True)],
    )


def _recommended_card(
    recommendation: UpNextRecommendation,
    is_pro: bool,
    policy: RecoveryPolicy,
) -> UpNextCard:
    split = recommendation.recommended_split
    matched = recommendation.matched_template
    is_match = has_matched_template(matched, policy)
    generate_enabled = can_generate(is_pro, recommendation.can_generate_ai)

    caption = _days_caption(recommendation.days_since_last_split)
    fatigue_label = FATIGUE_LABELS[recommendation.fatigue_status]

    actions = [CardAction(kind="swap", label="Swap")]
    if is_match:
        actions = [
            CardAction(kind="start", label="Start workout", primary=True,
                       template_id=matched.template_id),
            CardAction(kind="edit", label="Edit", template_id=matched.template_id),
        ] + actions
        subtitle = f"{matched.exercise_count} exercises • {matched.match_reason}"
    else:
        badge = None
        if not is_pro:
            badge = "1 FREE" if recommendation.can_generate_ai else "PRO"
        actions = [
            CardAction(
                kind="generate" if generate_enabled else "upgrade",
                label="Generate",
                primary=generate_enabled,
                split_key=split.split_key,
                badge=badge,
            ),
            CardAction(kind="create", label="Create"),
        ] + actions
        lead = f"No saved {split.label.lower()} template found."
        if generate_enabled:
            subtitle = f"{lead} Generate a smart workout or create your own."
        else:
            subtitle = f"{lead} Create one or upgrade to generate smart workouts."

    logger.debug(
        "Up-next card for split %r: matched=%s (score=%s), can_generate=%s",
        split.split_key, is_match,
        matched.match_score if matched else None, generate_enabled,
    )

    return UpNextCard(
        state="recommended",
        title=f"{split.label} Day",
        subtitle=subtitle,
        actions=actions,
        template=matched if is_match else None,
        has_matched_template=is_match,
        can_generate=generate_enabled,
        tags=filter_tags(split.tags, policy.max_split_tags),
        fatigue_label=f"{fatigue_label} • {caption}" if caption else fatigue_label,
        fatigue_color=FATIGUE_COLORS[recommendation.fatigue_status],
        reasoning=recommendation.reasoning or None,
    )


# ======================================================================
# Main entry point
# ======================================================================


def resolve_up_next_card(
    recommendation: Optional[UpNextRecommendation],
    *,
    is_loading: bool = False,
    is_error: bool = False,
    is_pro: bool = False,
    override_template: Optional[OverrideTemplate] = None,
    policy: Optional[RecoveryPolicy] = None,
) -> UpNextCard:
    """Resolve the card state for one render pass.

    Args:
        recommendation: Latest recommendation snapshot, if any.
        is_loading: Fetch in flight.
        is_error: Fetch failed (treated as "no recommendation").
        is_pro: Pro entitlement from the entitlement oracle.
        override_template: Manually chosen template, shown unconditionally.
        policy: Optional policy override.

    Returns:
        :class:`UpNextCard` in exactly one of the four states.
    """
    cfg = policy or DEFAULT_POLICY

    if is_loading:
        return _loading_card()
    if override_template is not None:
        return _override_card(override_template)
    if is_error or recommendation is None:
        return _empty_card()
    return _recommended_card(recommendation, is_pro, cfg)


def resolve_from_request(
    request: UpNextCardRequest,
    policy: Optional[RecoveryPolicy] = None,
) -> UpNextCard:
    """:func:`resolve_up_next_card` for an :class:`UpNextCardRequest`."""
    return resolve_up_next_card(
        request.recommendation,
        is_loading=request.is_loading,
        is_error=request.is_error,
        is_pro=request.is_pro,
        override_template=request.override_template,
        policy=policy,
    )
