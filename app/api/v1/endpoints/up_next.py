"""
Up-next endpoints — card resolution and generation instruction.
"""

import logging

from fastapi import APIRouter, Depends

from app.api.dependencies import get_policy
from app.recovery.generation import build_generation_instruction
from app.recovery.policy import RecoveryPolicy
from app.recovery.up_next import resolve_from_request
from app.schemas.up_next import (
    GenerationInstruction,
    GenerationRequest,
    UpNextCard,
    UpNextCardRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/card",
    summary="Resolve the up-next card (loading, override, empty or recommended).",
    response_model=UpNextCard,
)
def post_card(body: UpNextCardRequest, policy: RecoveryPolicy = Depends(get_policy)):
    card = resolve_from_request(body, policy)
    logger.info("Resolved up-next card state=%s", card.state)
    return card


@router.post(
    "/generation-request",
    summary="Build the instruction sent to the AI workout generator.",
    response_model=GenerationInstruction,
)
def post_generation_request(body: GenerationRequest):
    return GenerationInstruction(
        specific_request=build_generation_instruction(body.target_muscles, body.per_muscle),
    )
