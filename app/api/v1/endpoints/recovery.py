"""
Recovery endpoints — readiness, snapshot building, overview, heatmap and
training recommendation.

All endpoints are stateless: the caller posts the current snapshot and
receives freshly derived presentation values.
"""

import datetime
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_policy
from app.recovery.heatmap import build_heatmap
from app.recovery.overview import build_recovery_overview
from app.recovery.policy import RecoveryPolicy
from app.recovery.readiness import readiness_from_fatigue_score
from app.recovery.snapshot import build_fatigue_result
from app.recovery.templates import build_training_recommendation
from app.schemas.fatigue import FatigueResult, VolumeSnapshotRequest
from app.schemas.readiness import Readiness
from app.schemas.recovery import HeatmapEntry, RecoveryOverview
from app.schemas.up_next import TrainingRecommendation, TrainingRecommendationRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/readiness/{score}",
    summary="Convert a fatigue score into readiness percent, label and colour.",
    response_model=Readiness,
)
def get_readiness(score: float, policy: RecoveryPolicy = Depends(get_policy)):
    return readiness_from_fatigue_score(score, policy=policy)


@router.post(
    "/snapshot",
    summary="Build a fatigue snapshot from per-muscle volumes.",
    response_model=FatigueResult,
)
def post_snapshot(body: VolumeSnapshotRequest):
    result = build_fatigue_result(
        body.last_7_days,
        body.baseline_total,
        baseline_weeks=body.baseline_weeks,
        window_days=body.window_days,
        last_workout_at=body.last_workout_at,
        generated_at=body.generated_at,
    )
    logger.info("Built snapshot with %d muscles", len(result.per_muscle))
    return result


@router.post(
    "/overview",
    summary="Ranked muscles, summaries and heatmap for a snapshot.",
    response_model=RecoveryOverview,
)
def post_overview(
    snapshot: FatigueResult,
    as_of: Optional[datetime.datetime] = Query(
        None, description="Reference datetime (defaults to now)"
    ),
    policy: RecoveryPolicy = Depends(get_policy),
):
    return build_recovery_overview(snapshot, now=as_of, policy=policy)


@router.post(
    "/heatmap",
    summary="Body-map regions and intensity buckets for a snapshot.",
    response_model=list[HeatmapEntry],
)
def post_heatmap(
    snapshot: FatigueResult,
    as_of: Optional[datetime.datetime] = Query(
        None, description="Reference datetime (defaults to now)"
    ),
    policy: RecoveryPolicy = Depends(get_policy),
):
    return build_heatmap(snapshot.per_muscle, now=as_of, policy=policy)


@router.post(
    "/training-recommendation",
    summary="Muscles to target or avoid and saved templates that fit them.",
    response_model=TrainingRecommendation,
)
def post_training_recommendation(body: TrainingRecommendationRequest):
    return build_training_recommendation(body.snapshot, body.templates)
