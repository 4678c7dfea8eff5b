"""Extraction oracle (Anthropic Messages API) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, optional_env_var
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

ANTHROPIC_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_API_VERSION = "2023-06-01"
DEFAULT_ORACLE_MODEL = "claude-3-haiku-20240307"
DEFAULT_ORACLE_MAX_TOKENS = 100
DEFAULT_ORACLE_MAX_INPUT_CHARS = 1500
DEFAULT_ORACLE_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class OracleConfig:
    """Holds the settings needed to call the extraction oracle."""

    api_key: str
    model: str = DEFAULT_ORACLE_MODEL
    max_tokens: int = DEFAULT_ORACLE_MAX_TOKENS
    max_input_chars: int = DEFAULT_ORACLE_MAX_INPUT_CHARS
    resilience: ResilienceConfig | None = None

    def effective_resilience(self) -> ResilienceConfig:
        return self.resilience or default_oracle_resilience()


def default_oracle_resilience(
    *, timeout_seconds: float = DEFAULT_ORACLE_TIMEOUT_SECONDS
) -> ResilienceConfig:
    return ResilienceConfig(
        name="anthropic",
        base_url=ANTHROPIC_BASE_URL,
        timeout_seconds=timeout_seconds,
        retry=RetryPolicy(),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        default_headers={"anthropic-version": ANTHROPIC_API_VERSION},
    )


def _int_setting(name: str, default: int) -> int:
    raw = optional_env_var(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _float_setting(name: str, default: float) -> float:
    raw = optional_env_var(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def get_oracle_config() -> OracleConfig | None:
    """Return the oracle configuration, or ``None`` when the oracle is switched off."""

    if env_flag("FLAGWATCH_ORACLE_DISABLED"):
        return None
    api_key = optional_env_var("ANTHROPIC_API_KEY")
    if api_key is None:
        return None
    return OracleConfig(
        api_key=api_key,
        model=optional_env_var("FLAGWATCH_ORACLE_MODEL") or DEFAULT_ORACLE_MODEL,
        max_tokens=_int_setting("FLAGWATCH_ORACLE_MAX_TOKENS", DEFAULT_ORACLE_MAX_TOKENS),
        max_input_chars=_int_setting(
            "FLAGWATCH_ORACLE_MAX_INPUT_CHARS", DEFAULT_ORACLE_MAX_INPUT_CHARS
        ),
        resilience=default_oracle_resilience(
            timeout_seconds=_float_setting(
                "FLAGWATCH_ORACLE_TIMEOUT_SECONDS", DEFAULT_ORACLE_TIMEOUT_SECONDS
            )
        ),
    )
