"""Reconciliation (sweep) configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .env import optional_env_var
from .errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    timezone: tzinfo = UTC


def get_reconciliation_config() -> ReconciliationConfig:
    name = optional_env_var("FLAGWATCH_TIMEZONE")
    if name is None or name.upper() == "UTC":
        return ReconciliationConfig()
    try:
        zone = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone in FLAGWATCH_TIMEZONE: {name}") from exc
    return ReconciliationConfig(timezone=zone)
