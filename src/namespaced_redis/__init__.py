"""Namespaced Redis - a key-prefixing, fault-containing facade over a Redis client."""

from namespaced_redis.client import PrefixedRedisClient
from namespaced_redis.config import DEFAULT_PREFIX, NAMESPACE_SEPARATOR, PrefixConfig, default_prefix_config, normalize_prefix
from namespaced_redis.dsn import DEFAULT_HOST, DEFAULT_PORT, parse_dsn
from namespaced_redis.errors import (
    BaseNamespacedRedisError,
    ConfigurationError,
    InvalidDescriptorError,
    MalformedDescriptorError,
    UnsupportedSchemeError,
    UnsupportedTopologyError,
)
from namespaced_redis.facade import NamespacedRedis
from namespaced_redis.types import CommandResult, ConnectionParameters, Credentials, CriticalLogger, StoreClient

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_PREFIX",
    "NAMESPACE_SEPARATOR",
    "BaseNamespacedRedisError",
    "CommandResult",
    "ConfigurationError",
    "ConnectionParameters",
    "Credentials",
    "CriticalLogger",
    "InvalidDescriptorError",
    "MalformedDescriptorError",
    "NamespacedRedis",
    "PrefixConfig",
    "PrefixedRedisClient",
    "StoreClient",
    "UnsupportedSchemeError",
    "UnsupportedTopologyError",
    "default_prefix_config",
    "normalize_prefix",
    "parse_dsn",
]
