"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .oracle import OracleConfig, default_oracle_resilience, get_oracle_config
from .reconciliation import ReconciliationConfig, get_reconciliation_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "OracleConfig",
    "RateLimit",
    "ReconciliationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "default_oracle_resilience",
    "get_database_config",
    "get_oracle_config",
    "get_reconciliation_config",
    "get_storage_config",
]
