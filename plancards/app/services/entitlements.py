"""Application wiring for plan-card entitlement resolution."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from ..config import PlanCardConfig, load_plan_card_config
from ..entitlements import (
    EntitlementDecision,
    EntitlementResolver,
    PlanType,
    SubscriptionSnapshot,
    describe_plan_card,
)
from ..schemas.plan_cards import (
    PlanCardPairRequest,
    PlanCardPairResponse,
    PlanCardRequest,
    PlanCardResponse,
    PlanCardView,
)


logger = logging.getLogger("entitlements")


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class LoggingDecisionListener:
    """Listener that records each resolution to the application logger."""

    def __call__(self, snapshot: SubscriptionSnapshot, decision: EntitlementDecision) -> None:
        logger.debug(
            "Plan card resolved type=%s plan=%r billing_status=%r subscription=%s "
            "trial_ends_on=%s plan_expires_on=%s in_trial=%s premium_access=%s ui_state=%s",
            decision.plan_type.value,
            snapshot.active_plan_label,
            snapshot.billing_status,
            snapshot.subscription_id,
            _isoformat(snapshot.trial_ends_on),
            _isoformat(snapshot.plan_expires_on),
            decision.is_trial_active,
            decision.has_premium_access,
            decision.ui_state.value,
        )


@lru_cache(maxsize=1)
def get_plan_card_config() -> PlanCardConfig:
    return load_plan_card_config()


@lru_cache(maxsize=1)
def get_entitlement_resolver() -> EntitlementResolver:
    config = get_plan_card_config()
    listener = LoggingDecisionListener() if config.debug else None
    return EntitlementResolver(listener=listener)


def _card_response(
    decision: EntitlementDecision,
    *,
    price: Optional[str],
    features,
    is_loading: bool,
    config: PlanCardConfig,
) -> PlanCardResponse:
    affordance = describe_plan_card(decision, price=price, is_loading=is_loading, config=config)
    return PlanCardResponse(
        decision=decision,
        card=PlanCardView.from_affordance(affordance),
        features=list(features),
    )


def build_plan_card(
    request: PlanCardRequest,
    *,
    resolver: Optional[EntitlementResolver] = None,
    config: Optional[PlanCardConfig] = None,
) -> PlanCardResponse:
    """Resolve a single plan card from raw request fields."""

    resolver = resolver or get_entitlement_resolver()
    config = config or get_plan_card_config()
    snapshot = resolver.snapshot(**request.snapshot_fields())
    decision = resolver.evaluate(snapshot, request.plan_type)
    return _card_response(
        decision,
        price=request.price,
        features=request.features,
        is_loading=request.is_loading,
        config=config,
    )


def build_plan_card_pair(
    request: PlanCardPairRequest,
    *,
    resolver: Optional[EntitlementResolver] = None,
    config: Optional[PlanCardConfig] = None,
) -> PlanCardPairResponse:
    """Resolve the free and premium cards against one shared snapshot."""

    resolver = resolver or get_entitlement_resolver()
    config = config or get_plan_card_config()
    snapshot = resolver.snapshot(**request.snapshot_fields())

    free = _card_response(
        resolver.evaluate(snapshot, PlanType.FREE),
        price=None,
        features=request.free_features,
        is_loading=request.is_loading,
        config=config,
    )
    premium = _card_response(
        resolver.evaluate(snapshot, PlanType.PREMIUM),
        price=request.premium_price,
        features=request.premium_features,
        is_loading=request.is_loading,
        config=config,
    )
    return PlanCardPairResponse(free=free, premium=premium)


__all__ = [
    "LoggingDecisionListener",
    "build_plan_card",
    "build_plan_card_pair",
    "get_entitlement_resolver",
    "get_plan_card_config",
]
