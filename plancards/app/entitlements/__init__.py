"""Entitlement resolution for subscription plan cards."""

from .affordances import (
    PlanCardAction,
    PlanCardAffordance,
    PlanCardTone,
    PlanCardVariant,
    describe_plan_card,
)
from .models import (
    ActiveUntilBasis,
    EntitlementDecision,
    PlanType,
    SubscriptionSnapshot,
    UiState,
)
from .normalization import (
    PlanToken,
    classify_plan,
    normalize_plan_label,
    parse_timestamp,
)
from .resolver import (
    SUBSCRIBED_PLAN_TOKENS,
    DecisionListener,
    EntitlementResolver,
    resolve_entitlement,
)

__all__ = [
    "ActiveUntilBasis",
    "DecisionListener",
    "EntitlementDecision",
    "EntitlementResolver",
    "PlanCardAction",
    "PlanCardAffordance",
    "PlanCardTone",
    "PlanCardVariant",
    "PlanToken",
    "PlanType",
    "SUBSCRIBED_PLAN_TOKENS",
    "SubscriptionSnapshot",
    "UiState",
    "classify_plan",
    "describe_plan_card",
    "normalize_plan_label",
    "parse_timestamp",
    "resolve_entitlement",
]
