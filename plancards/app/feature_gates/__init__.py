"""Feature gating utilities coordinating entitlement enforcement."""
from .context import EntitlementContext
from .enforcement import require_premium_access
from .exceptions import FeatureGateError

__all__ = [
    "EntitlementContext",
    "FeatureGateError",
    "require_premium_access",
]
