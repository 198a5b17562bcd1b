"""Helpers for enforcing premium access on API and service layers."""
from __future__ import annotations

from ..entitlements import EntitlementDecision
from .exceptions import FeatureGateError


def require_premium_access(
    decision: EntitlementDecision,
    *,
    error_code: str = "premium_required",
    message: str | None = None,
) -> None:
    """Ensure a resolved decision grants premium access before proceeding.

    Parameters
    ----------
    decision:
        The :class:`EntitlementDecision` produced for the caller.
    error_code:
        Optional override for the surfaced error code when access is not
        granted. Defaults to ``"premium_required"``.
    message:
        Optional human-friendly message explaining the failure. If omitted, a
        default message is used.
    """

    if decision.has_premium_access:
        return

    failure_message = message or "An active premium plan or trial is required."
    raise FeatureGateError(
        code=error_code,
        message=failure_message,
        detail={
            "plan": decision.normalized_plan,
            "ui_state": decision.ui_state.value,
            "is_cancelled": decision.is_cancelled,
        },
    )
