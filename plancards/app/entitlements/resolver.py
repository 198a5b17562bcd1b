"""Entitlement resolution for plan cards."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, FrozenSet, Optional, Protocol, Tuple, Union

from .models import (
    ActiveUntilBasis,
    EntitlementDecision,
    PlanType,
    SubscriptionSnapshot,
    UiState,
)
from .normalization import (
    CANCELLED_STATUS,
    PlanToken,
    classify_plan,
    normalize_plan_label,
)

logger = logging.getLogger("entitlements")

SUBSCRIBED_PLAN_TOKENS: FrozenSet[PlanToken] = frozenset(
    {PlanToken.PREMIUM, PlanToken.PENDING, PlanToken.SCHEDULED_CANCEL}
)


class DecisionListener(Protocol):
    """Observer notified after each resolution."""

    def __call__(self, snapshot: SubscriptionSnapshot, decision: EntitlementDecision) -> None:
        ...


def resolve_entitlement(
    snapshot: SubscriptionSnapshot,
    plan_type: Union[PlanType, str] = PlanType.PREMIUM,
    *,
    listener: Optional[DecisionListener] = None,
) -> EntitlementDecision:
    """Decide access and the plan-card state for ``snapshot``.

    Trial access takes precedence over the paid plan: an active trial grants
    premium access even when the subscription is cancelled. Missing or
    unparseable timestamps never grant access.
    """

    plan_type = PlanType(plan_type)
    now = snapshot.now

    normalized_plan = normalize_plan_label(snapshot.active_plan_label)
    plan_token = classify_plan(normalized_plan)

    is_cancelled = (
        snapshot.billing_status == CANCELLED_STATUS
        or plan_token == PlanToken.SCHEDULED_CANCEL
    )
    is_trial_active = snapshot.trial_ends_on is not None and now < snapshot.trial_ends_on
    is_subscribed_record = plan_token in SUBSCRIBED_PLAN_TOKENS
    is_paid_plan_active = (
        plan_token == PlanToken.PREMIUM
        and not is_cancelled
        and snapshot.plan_expires_on is not None
        and now < snapshot.plan_expires_on
    )
    has_premium_access = is_trial_active or is_paid_plan_active

    ui_state, basis = _select_ui_state(
        plan_type,
        has_record=is_subscribed_record and snapshot.has_subscription_id,
        is_cancelled=is_cancelled,
        is_trial_active=is_trial_active,
        has_premium_access=has_premium_access,
    )

    decision = EntitlementDecision(
        plan_type=plan_type,
        normalized_plan=normalized_plan,
        plan_token=plan_token,
        is_trial_active=is_trial_active,
        is_cancelled=is_cancelled,
        is_subscribed_record=is_subscribed_record,
        has_premium_access=has_premium_access,
        ui_state=ui_state,
        active_until_basis=basis,
        trial_ends_on=snapshot.trial_ends_on,
        plan_expires_on=snapshot.plan_expires_on,
    )

    if listener is not None:
        try:
            listener(snapshot, decision)
        except Exception:
            logger.exception(
                "Entitlement decision listener failed",
                extra={"plan_type": plan_type.value, "ui_state": ui_state.value},
            )

    return decision


def _select_ui_state(
    plan_type: PlanType,
    *,
    has_record: bool,
    is_cancelled: bool,
    is_trial_active: bool,
    has_premium_access: bool,
) -> Tuple[UiState, Optional[ActiveUntilBasis]]:
    # Branch order matters; the conditions overlap.
    if plan_type == PlanType.FREE:
        if has_premium_access:
            return UiState.FREE_USING_ALL, None
        return UiState.FREE_PLAIN, None

    if has_record:
        if is_cancelled and is_trial_active:
            return UiState.TRIAL_CANCELLED_ACTIVE, None
        if is_cancelled:
            return UiState.PLAN_EXPIRED, None
        if is_trial_active:
            return UiState.CANCEL_TRIAL, None
        return UiState.CANCEL_SUBSCRIPTION, None

    if has_premium_access:
        basis = ActiveUntilBasis.TRIAL if is_trial_active else ActiveUntilBasis.PLAN
        return UiState.PLAN_ACTIVE_UNTIL, basis

    return UiState.SUBSCRIBE_CTA, None


class EntitlementResolver:
    """Builds clock-stamped snapshots and resolves them."""

    def __init__(
        self,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        listener: Optional[DecisionListener] = None,
    ) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._listener = listener

    def snapshot(
        self,
        *,
        active_plan_label: Optional[str] = None,
        billing_status: Optional[str] = None,
        subscription_id: Optional[str] = None,
        trial_ends_on: Any = None,
        plan_expires_on: Any = None,
    ) -> SubscriptionSnapshot:
        return SubscriptionSnapshot(
            now=self._clock(),
            active_plan_label=active_plan_label,
            billing_status=billing_status,
            subscription_id=subscription_id,
            trial_ends_on=trial_ends_on,
            plan_expires_on=plan_expires_on,
        )

    def evaluate(
        self,
        snapshot: SubscriptionSnapshot,
        plan_type: Union[PlanType, str] = PlanType.PREMIUM,
    ) -> EntitlementDecision:
        return resolve_entitlement(snapshot, plan_type, listener=self._listener)

    def resolve(
        self,
        plan_type: Union[PlanType, str] = PlanType.PREMIUM,
        **fields: Any,
    ) -> EntitlementDecision:
        """Snapshot the given raw fields at the current clock and resolve them."""

        return self.evaluate(self.snapshot(**fields), plan_type)
