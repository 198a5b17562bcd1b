"""API routes exposing plan-card entitlement decisions."""
from __future__ import annotations

from fastapi import APIRouter

from ..schemas.plan_cards import (
    PlanCardPairRequest,
    PlanCardPairResponse,
    PlanCardRequest,
    PlanCardResponse,
)

router = APIRouter(prefix="/api/billing/plan-cards", tags=["billing"])


@router.post("/resolve", response_model=PlanCardResponse)
def resolve_plan_card(payload: PlanCardRequest) -> PlanCardResponse:
    """Return the entitlement decision and card affordance for one plan."""
    from ..services import entitlements as entitlement_service

    return entitlement_service.build_plan_card(payload)


@router.post("/resolve-pair", response_model=PlanCardPairResponse)
def resolve_plan_card_pair(payload: PlanCardPairRequest) -> PlanCardPairResponse:
    """Return both the free and premium cards for one subscription snapshot."""
    from ..services import entitlements as entitlement_service

    return entitlement_service.build_plan_card_pair(payload)
