"""Shared utilities and components for all services."""

from .config import BaseClickHouseConfig, BaseLoggingConfig, BaseServiceConfig
from .constants import Environment, Fields, Measurement

__all__ = [
    "Environment",
    "Measurement",
    "Fields",
    "BaseServiceConfig",
    "BaseLoggingConfig",
    "BaseClickHouseConfig",
]
