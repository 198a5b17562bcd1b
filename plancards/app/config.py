"""Plan card configuration helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional
import logging
import os


@dataclass(frozen=True)
class PlanCardConfig:
    """Configuration for plan-card resolution and labels."""

    trial_days: int = 7
    date_format: str = "%m/%d/%Y"
    debug: bool = False
    log_level: str = "INFO"


def _to_bool(value: Optional[str], *, default: bool) -> bool:
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return default


def _to_int(value: Optional[str], *, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Expected integer value, got {value!r}") from exc


def load_plan_card_config(env: Optional[Mapping[str, str]] = None) -> PlanCardConfig:
    """Load :class:`PlanCardConfig` from environment variables."""

    env_mapping = os.environ if env is None else env

    trial_days = max(1, _to_int(env_mapping.get("PLAN_CARDS_TRIAL_DAYS"), default=7))
    date_format = (env_mapping.get("PLAN_CARDS_DATE_FORMAT") or "").strip() or "%m/%d/%Y"
    debug = _to_bool(env_mapping.get("PLAN_CARDS_DEBUG"), default=False)
    log_level = (env_mapping.get("PLAN_CARDS_LOG_LEVEL") or "INFO").strip().upper() or "INFO"

    return PlanCardConfig(
        trial_days=trial_days,
        date_format=date_format,
        debug=debug,
        log_level=log_level,
    )


def configure_logging(config: PlanCardConfig) -> None:
    level = logging.DEBUG if config.debug else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
