"""Domain models for plan-card entitlement resolution."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .normalization import PlanToken, ensure_utc, parse_timestamp


class PlanType(str, Enum):
    """The plan card being evaluated."""

    FREE = "free"
    PREMIUM = "premium"

    @classmethod
    def _missing_(cls, value: object) -> Optional["PlanType"]:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class UiState(str, Enum):
    """Affordance a presentation layer should show for a plan card."""

    SUBSCRIBE_CTA = "subscribe_cta"
    TRIAL_ACTIVE = "trial_active"
    TRIAL_CANCELLED_ACTIVE = "trial_cancelled_active"
    PLAN_ACTIVE_UNTIL = "plan_active_until"
    CANCEL_SUBSCRIPTION = "cancel_subscription"
    CANCEL_TRIAL = "cancel_trial"
    PLAN_EXPIRED = "plan_expired"
    FREE_USING_ALL = "free_using_all"
    FREE_PLAIN = "free_plain"


class ActiveUntilBasis(str, Enum):
    """Which instant a ``PLAN_ACTIVE_UNTIL`` state refers to."""

    TRIAL = "trial"
    PLAN = "plan"


class SubscriptionSnapshot(BaseModel):
    """Raw subscription fields as supplied by the billing collaborator."""

    now: datetime
    active_plan_label: str = ""
    billing_status: Optional[str] = None
    subscription_id: Optional[str] = None
    trial_ends_on: Optional[datetime] = None
    plan_expires_on: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("active_plan_label", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("billing_status", "subscription_id", mode="before")
    @classmethod
    def _coerce_optional_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    @field_validator("trial_ends_on", "plan_expires_on", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @field_validator("now")
    @classmethod
    def _normalize_now(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @property
    def has_subscription_id(self) -> bool:
        return bool(self.subscription_id)


class EntitlementDecision(BaseModel):
    """Outcome of resolving a snapshot for one plan card."""

    plan_type: PlanType
    normalized_plan: str
    plan_token: PlanToken
    is_trial_active: bool
    is_cancelled: bool
    is_subscribed_record: bool
    has_premium_access: bool
    ui_state: UiState
    active_until_basis: Optional[ActiveUntilBasis] = None
    trial_ends_on: Optional[datetime] = None
    plan_expires_on: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @property
    def active_until(self) -> Optional[datetime]:
        """Instant referenced by the active-until wording, when there is one."""

        if self.active_until_basis == ActiveUntilBasis.TRIAL:
            return self.trial_ends_on
        if self.active_until_basis == ActiveUntilBasis.PLAN:
            return self.plan_expires_on
        return None
