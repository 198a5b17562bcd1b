"""Convenience wrapper around entitlement decisions for feature gating."""
from __future__ import annotations

from dataclasses import dataclass

from ..entitlements import EntitlementDecision, UiState
from .enforcement import require_premium_access


@dataclass(frozen=True)
class EntitlementContext:
    """Facade exposing gating-centric helpers for a resolved decision."""

    decision: EntitlementDecision

    @property
    def has_premium_access(self) -> bool:
        return self.decision.has_premium_access

    @property
    def is_trial_active(self) -> bool:
        return self.decision.is_trial_active

    @property
    def is_cancelled(self) -> bool:
        return self.decision.is_cancelled

    @property
    def ui_state(self) -> UiState:
        return self.decision.ui_state

    def require_premium(self, *, error_code: str = "premium_required") -> None:
        """Ensure the decision grants premium access."""

        require_premium_access(self.decision, error_code=error_code)
