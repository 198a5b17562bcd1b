from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from plancards.app.config import PlanCardConfig
from plancards.app.entitlements import EntitlementResolver, PlanType, UiState
from plancards.app.routes import plan_cards as plan_cards_routes
from plancards.app.schemas.plan_cards import (
    PlanCardPairRequest,
    PlanCardRequest,
    PlanCardResponse,
)
from plancards.app.services import entitlements as entitlement_service

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_resolver(monkeypatch) -> EntitlementResolver:
    resolver = EntitlementResolver(clock=lambda: NOW)
    monkeypatch.setattr(entitlement_service, "get_entitlement_resolver", lambda: resolver)
    monkeypatch.setattr(entitlement_service, "get_plan_card_config", lambda: PlanCardConfig())
    return resolver


def test_request_accepts_component_style_aliases():
    request = PlanCardRequest.model_validate(
        {
            "type": "Premium",
            "activePlan": "Premium Plan",
            "billingStatus": "active",
            "subscriptionId": "sub-1",
            "planExpiresOn": "2025-07-01T00:00:00Z",
            "trialEndsOn": "not a date",
            "isLoading": True,
            "price": "$4.99",
        }
    )

    assert request.plan_type == PlanType.PREMIUM
    assert request.is_loading is True
    assert request.snapshot_fields()["active_plan_label"] == "Premium Plan"


def test_resolve_plan_card_route(fixed_resolver):
    payload = PlanCardRequest(
        type="Premium",
        activePlan="Scheduled Cancel",
        billingStatus="active",
        subscriptionId="sub-1",
        trialEndsOn=(NOW + timedelta(days=2)).isoformat(),
        features=["Unlimited exports"],
    )

    response = plan_cards_routes.resolve_plan_card(payload)

    assert isinstance(response, PlanCardResponse)
    assert response.decision.ui_state == UiState.TRIAL_CANCELLED_ACTIVE
    assert response.decision.has_premium_access is True
    assert response.card.label == "Trial active until 06/03/2025"
    assert response.card.heading == "Advanced"
    assert response.card.variant == "badge"
    assert response.features == ["Unlimited exports"]


def test_resolve_plan_card_with_malformed_dates_fails_closed(fixed_resolver):
    payload = PlanCardRequest(
        type="Premium",
        activePlan="Premium Plan",
        planExpiresOn="soon",
        trialEndsOn={"unexpected": "shape"},
    )

    response = plan_cards_routes.resolve_plan_card(payload)

    assert response.decision.has_premium_access is False
    assert response.decision.ui_state == UiState.SUBSCRIBE_CTA
    assert response.card.label == "Start Free with 7 Day Trial"
    assert response.card.action == "subscribe"


def test_resolve_pair_uses_one_snapshot(fixed_resolver):
    payload = PlanCardPairRequest(
        activePlan="Premium Plan",
        subscriptionId="sub-1",
        planExpiresOn=(NOW + timedelta(days=30)).isoformat(),
        premiumPrice="$9.99",
        freeFeatures=["Basic reports"],
        premiumFeatures=["Everything"],
    )

    response = plan_cards_routes.resolve_plan_card_pair(payload)

    assert response.free.decision.ui_state == UiState.FREE_USING_ALL
    assert response.free.card.highlighted is False
    assert response.free.features == ["Basic reports"]
    assert response.premium.decision.ui_state == UiState.CANCEL_SUBSCRIPTION
    assert response.premium.card.highlighted is True
    assert response.premium.card.price_label == "$9.99"


def test_build_plan_card_accepts_explicit_collaborators():
    resolver = EntitlementResolver(clock=lambda: NOW)
    request = PlanCardRequest(type="free")

    response = entitlement_service.build_plan_card(
        request, resolver=resolver, config=PlanCardConfig(trial_days=3)
    )

    assert response.decision.ui_state == UiState.FREE_PLAIN
    assert response.card.label == "You're on Free Plan"


def test_logging_listener_emits_debug_record(caplog):
    resolver = EntitlementResolver(clock=lambda: NOW, listener=entitlement_service.LoggingDecisionListener())

    with caplog.at_level(logging.DEBUG, logger="entitlements"):
        resolver.resolve(PlanType.PREMIUM, active_plan_label="Premium Plan", subscription_id="sub-9")

    messages = [record.getMessage() for record in caplog.records if record.name == "entitlements"]
    assert any("subscription=sub-9" in message for message in messages)
    assert any("ui_state=cancel_subscription" in message for message in messages)


def test_debug_config_attaches_logging_listener(monkeypatch):
    entitlement_service.get_entitlement_resolver.cache_clear()
    monkeypatch.setattr(entitlement_service, "get_plan_card_config", lambda: PlanCardConfig(debug=True))
    try:
        resolver = entitlement_service.get_entitlement_resolver()
        assert isinstance(resolver._listener, entitlement_service.LoggingDecisionListener)
    finally:
        entitlement_service.get_entitlement_resolver.cache_clear()
