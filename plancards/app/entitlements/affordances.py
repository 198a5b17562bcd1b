"""Map entitlement decisions onto plan-card affordances."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from ..config import PlanCardConfig
from .models import EntitlementDecision, PlanType, UiState


class PlanCardAction(str, Enum):
    """Callback a plan-card button is wired to."""

    SUBSCRIBE = "subscribe"
    CANCEL = "cancel"
    NONE = "none"


class PlanCardTone(str, Enum):
    DEFAULT = "default"
    CRITICAL = "critical"


class PlanCardVariant(str, Enum):
    """How the affordance is drawn: a button style or a static badge."""

    PRIMARY = "primary"
    TERTIARY = "tertiary"
    BADGE = "badge"


@dataclass(frozen=True)
class PlanCardAffordance:
    """Toolkit-agnostic description of what a plan card should offer."""

    ui_state: UiState
    label: str
    action: PlanCardAction
    enabled: bool
    loading: bool
    tone: PlanCardTone
    variant: PlanCardVariant
    highlighted: bool
    heading: str
    price_label: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "ui_state": self.ui_state.value,
            "label": self.label,
            "action": self.action.value,
            "enabled": self.enabled,
            "loading": self.loading,
            "tone": self.tone.value,
            "variant": self.variant.value,
            "highlighted": self.highlighted,
            "heading": self.heading,
            "price_label": self.price_label,
        }


_HEADINGS = {PlanType.FREE: "Beginner", PlanType.PREMIUM: "Advanced"}

_ACTIONS = {
    UiState.CANCEL_TRIAL: PlanCardAction.CANCEL,
    UiState.CANCEL_SUBSCRIPTION: PlanCardAction.CANCEL,
    UiState.SUBSCRIBE_CTA: PlanCardAction.SUBSCRIBE,
}

_BADGE_STATES = {
    UiState.TRIAL_CANCELLED_ACTIVE,
    UiState.FREE_USING_ALL,
    UiState.FREE_PLAIN,
}


def _format_date(value: Optional[datetime], date_format: str) -> str:
    if value is None:
        return "Unknown"
    return value.strftime(date_format)


def _variant_for(state: UiState) -> PlanCardVariant:
    if state in _BADGE_STATES:
        return PlanCardVariant.BADGE
    if state == UiState.CANCEL_SUBSCRIPTION:
        return PlanCardVariant.TERTIARY
    return PlanCardVariant.PRIMARY


def _label_for(decision: EntitlementDecision, config: PlanCardConfig) -> str:
    state = decision.ui_state
    if state in {UiState.TRIAL_CANCELLED_ACTIVE, UiState.TRIAL_ACTIVE}:
        return f"Trial active until {_format_date(decision.trial_ends_on, config.date_format)}"
    if state == UiState.PLAN_EXPIRED:
        return "Plan expired"
    if state == UiState.CANCEL_TRIAL:
        return "Cancel Trial"
    if state == UiState.CANCEL_SUBSCRIPTION:
        return "Cancel Subscription"
    if state == UiState.PLAN_ACTIVE_UNTIL:
        prefix = "Trial" if decision.is_trial_active else "Plan"
        return f"{prefix} active until {_format_date(decision.active_until, config.date_format)}"
    if state == UiState.SUBSCRIBE_CTA:
        return f"Start Free with {config.trial_days} Day Trial"
    if state == UiState.FREE_USING_ALL:
        return "Using All Features"
    return "You're on Free Plan"


def describe_plan_card(
    decision: EntitlementDecision,
    *,
    price: Optional[str] = None,
    is_loading: bool = False,
    config: Optional[PlanCardConfig] = None,
) -> PlanCardAffordance:
    """Describe the button, label and emphasis for a resolved plan card.

    Dates in labels are rendered in UTC, not the viewer's local time zone.
    """

    config = config or PlanCardConfig()
    action = _ACTIONS.get(decision.ui_state, PlanCardAction.NONE)
    actionable = action != PlanCardAction.NONE
    is_premium = decision.plan_type == PlanType.PREMIUM

    return PlanCardAffordance(
        ui_state=decision.ui_state,
        label=_label_for(decision, config),
        action=action,
        enabled=actionable and not is_loading,
        loading=actionable and is_loading,
        tone=PlanCardTone.CRITICAL if action == PlanCardAction.CANCEL else PlanCardTone.DEFAULT,
        variant=_variant_for(decision.ui_state),
        highlighted=decision.has_premium_access == is_premium,
        heading=_HEADINGS[decision.plan_type],
        price_label=price or "Free",
    )
