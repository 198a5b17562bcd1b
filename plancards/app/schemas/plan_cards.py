"""API schemas for plan-card endpoints."""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..entitlements import EntitlementDecision, PlanCardAffordance, PlanType


class SubscriptionFields(BaseModel):
    """Raw subscription fields shared by the plan-card requests."""

    active_plan: Optional[str] = Field(alias="activePlan", default=None)
    billing_status: Optional[str] = Field(alias="billingStatus", default=None)
    subscription_id: Optional[str] = Field(alias="subscriptionId", default=None)
    # Kept loose so unparseable dates reach the resolver and degrade to absent.
    plan_expires_on: Any = Field(alias="planExpiresOn", default=None)
    trial_ends_on: Any = Field(alias="trialEndsOn", default=None)
    is_loading: bool = Field(alias="isLoading", default=False)

    model_config = ConfigDict(populate_by_name=True)

    def snapshot_fields(self) -> dict[str, Any]:
        return {
            "active_plan_label": self.active_plan,
            "billing_status": self.billing_status,
            "subscription_id": self.subscription_id,
            "trial_ends_on": self.trial_ends_on,
            "plan_expires_on": self.plan_expires_on,
        }


class PlanCardRequest(SubscriptionFields):
    plan_type: PlanType = Field(alias="type", default=PlanType.PREMIUM)
    price: Optional[str] = None
    features: List[str] = Field(default_factory=list)

    @field_validator("plan_type", mode="before")
    @classmethod
    def _parse_plan_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return PlanType(value)
        return value


class PlanCardPairRequest(SubscriptionFields):
    premium_price: Optional[str] = Field(alias="premiumPrice", default=None)
    free_features: List[str] = Field(alias="freeFeatures", default_factory=list)
    premium_features: List[str] = Field(alias="premiumFeatures", default_factory=list)


class PlanCardView(BaseModel):
    ui_state: str = Field(alias="uiState")
    label: str
    action: str
    enabled: bool
    loading: bool
    tone: str
    variant: str
    highlighted: bool
    heading: str
    price_label: str = Field(alias="priceLabel")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_affordance(cls, affordance: PlanCardAffordance) -> "PlanCardView":
        return cls(**affordance.to_dict())


class PlanCardResponse(BaseModel):
    decision: EntitlementDecision
    card: PlanCardView
    features: List[str] = Field(default_factory=list)


class PlanCardPairResponse(BaseModel):
    free: PlanCardResponse
    premium: PlanCardResponse
