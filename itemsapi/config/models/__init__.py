"""Configuration model exports.

    from itemsapi.config.models import APIConfig, StorageConfig
"""

from itemsapi.config.models.api import APIConfig
from itemsapi.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)
from itemsapi.config.models.storage import (
    BackendType,
    DynamoDBConfig,
    PostgresConfig,
    StorageConfig,
)

__all__ = [
    "APIConfig",
    "BackendType",
    "DynamoDBConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "PostgresConfig",
    "StorageConfig",
    "TracingConfig",
]
