"""Error classes for namespaced Redis access.

Exception Hierarchy:
    BaseNamespacedRedisError (base for all errors raised by this package)
    └── ConfigurationError (raised while building a facade or client)
        ├── InvalidDescriptorError (ValueError)
        │   ├── UnsupportedSchemeError
        │   └── MalformedDescriptorError
        └── UnsupportedTopologyError
"""

ExtraInfoType = dict[str, str | int | float | bool | None]


class BaseNamespacedRedisError(Exception):
    """Base exception for all namespaced Redis errors."""

    def __init__(self, message: str | None = None, extra_info: ExtraInfoType | None = None):
        message_parts: list[str] = []

        if message:
            message_parts.append(message)

        if extra_info:
            extra_info_str = ";".join(f"{k}: {v}" for k, v in extra_info.items())
            if message:
                extra_info_str = "(" + extra_info_str + ")"

            message_parts.append(extra_info_str)

        super().__init__(": ".join(message_parts))


class ConfigurationError(BaseNamespacedRedisError):
    """Raised when a facade or client configuration is invalid or incomplete."""


class InvalidDescriptorError(ConfigurationError, ValueError):
    """Raised when a connection descriptor cannot be parsed."""


class UnsupportedSchemeError(InvalidDescriptorError):
    """Raised when a connection descriptor uses an unsupported scheme."""

    def __init__(self, scheme: str, valid_schemes: tuple[str, ...]):
        super().__init__(
            message=f"Invalid DSN. Supported schemes are {', '.join(valid_schemes)}",
            extra_info={"scheme": scheme},
        )


class MalformedDescriptorError(InvalidDescriptorError):
    """Raised when a connection descriptor is not a well-formed URI."""

    def __init__(self, reason: str):
        super().__init__(message="Invalid DSN. The descriptor is malformed", extra_info={"reason": reason})


class UnsupportedTopologyError(ConfigurationError):
    """Raised when an operation is not available for the configured server topology."""

    def __init__(self, operation: str, topology: str):
        super().__init__(
            message="The operation is not supported by this server topology.",
            extra_info={"operation": operation, "topology": topology},
        )
