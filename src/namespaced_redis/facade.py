"""A facade that namespaces keys and contains command faults.

Example:
    NamespacedRedis.prefix("myapp")

    redis = NamespacedRedis("redis://localhost:6379/2")
    redis.set_logger(logging.getLogger("myapp.redis"))

    redis.set("greeting", "hello")  # Writes the key "myapp:greeting" in database 2
    redis.invoke("get", ["greeting"])
"""

import logging
import traceback
from collections.abc import Callable, Mapping, Sequence
from typing import Any, overload

from namespaced_redis.client import PrefixedRedisClient, ServerType
from namespaced_redis.config import PrefixConfig, default_prefix_config, normalize_prefix
from namespaced_redis.dsn import parse_dsn
from namespaced_redis.type_checking import bear_spray
from namespaced_redis.types import CommandResult, ConnectionParameters, CriticalLogger, StoreClient

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., StoreClient]

DEFAULT_ERROR_TYPES: tuple[type[Exception], ...] = (Exception,)


class NamespacedRedis:
    """Dispatches any Redis command to a store client whose keys are namespaced by a prefix.

    Faults raised by the store client while executing a command are contained: they are reported to the
    attached logger, if any, at critical severity and the command returns False. Use `try_invoke` to tell
    a failed command apart from one that returned a falsy value.
    """

    @overload
    def __init__(
        self,
        server: str,
        options: Mapping[str, Any] | None = None,
        database: int | None = None,
        *,
        client_factory: ClientFactory | None = None,
        prefix_config: PrefixConfig | None = None,
        error_types: tuple[type[Exception], ...] = DEFAULT_ERROR_TYPES,
    ) -> None: ...

    @overload
    def __init__(
        self,
        server: ConnectionParameters | Mapping[str, Any] | Sequence[Any],
        options: Mapping[str, Any] | None = None,
        database: int | None = None,
        *,
        client_factory: ClientFactory | None = None,
        prefix_config: PrefixConfig | None = None,
        error_types: tuple[type[Exception], ...] = DEFAULT_ERROR_TYPES,
    ) -> None: ...

    @bear_spray
    def __init__(
        self,
        server: ServerType,
        options: Mapping[str, Any] | None = None,
        database: int | None = None,
        *,
        client_factory: ClientFactory | None = None,
        prefix_config: PrefixConfig | None = None,
        error_types: tuple[type[Exception], ...] = DEFAULT_ERROR_TYPES,
    ) -> None:
        """Initialize the facade.

        Args:
            server: A descriptor string, connection parameters, or a structured topology (a mapping of
                client arguments or a sequence of cluster nodes) that is passed through to the client factory.
            options: Client options. The ``prefix`` option sets the key prefix; all others are passed to the
                client factory.
            database: The database to select. A database found in a descriptor or in connection parameters
                takes precedence over this value.
            client_factory: Creates the store client from the server, the prefix and the client options.
                Defaults to `PrefixedRedisClient.from_server`.
            prefix_config: Supplies the prefix when no ``prefix`` option is given. Defaults to the
                process-wide default prefix.
            error_types: Exception types raised by the store client that are contained. Defaults to (Exception,).

        Raises:
            InvalidDescriptorError: If the descriptor is malformed or its scheme is not supported.
        """
        client_options: dict[str, Any] = dict(options or {})

        prefix: str | None = client_options.pop("prefix", None)
        if prefix is None:
            prefix = (prefix_config or default_prefix_config).prefix

        self._prefix: str = normalize_prefix(prefix)
        self._logger: CriticalLogger | None = None
        self._error_types: tuple[type[Exception], ...] = error_types
        self._connection_parameters: ConnectionParameters | None = None

        if isinstance(server, str):
            server = parse_dsn(server)

        if isinstance(server, ConnectionParameters):
            self._connection_parameters = server

            # A database in the descriptor wins over the `database` argument
            if server.database is not None:
                database = server.database

        factory: ClientFactory = client_factory or PrefixedRedisClient.from_server
        self._client: StoreClient = factory(server, prefix=self._prefix, **client_options)

        if database is not None:
            logger.debug(f"Selecting database {database} for prefix {self._prefix!r}")
            _ = self._client.call("select", [database])

    @staticmethod
    def prefix(namespace: str) -> None:
        """Set the process-wide default prefix used by facades constructed from now on."""
        default_prefix_config.set_prefix(namespace)

    @property
    def client(self) -> StoreClient:
        return self._client

    @property
    def connection_parameters(self) -> ConnectionParameters | None:
        """The parsed connection parameters, or None when a structured topology was given."""
        return self._connection_parameters

    def set_logger(self, logger: CriticalLogger | None) -> None:
        """Attach a logger for contained faults, replacing any attached logger. None detaches it."""
        self._logger = logger

    def get_prefix(self) -> str:
        return self._prefix

    def try_invoke(self, command: str, args: Sequence[Any] = (), kwargs: Mapping[str, Any] | None = None) -> CommandResult:
        """Execute a command and return its outcome without raising store client faults.

        Args:
            command: The name of the command.
            args: The positional arguments of the command.
            kwargs: The keyword arguments of the command.

        Returns:
            A result holding either the store client's return value or the contained fault.
        """
        try:
            value: Any = self._client.call(command, list(args), kwargs)  # pyright: ignore[reportAny]
        except self._error_types as e:
            attached_logger = self._logger
            if attached_logger is not None:
                trace = "".join(traceback.format_exception(e))
                attached_logger.critical(f"Could not call redis command [{command}]: {trace}")
            return CommandResult(command=command, error=e)

        return CommandResult(command=command, value=value)

    def invoke(self, command: str, args: Sequence[Any] = (), kwargs: Mapping[str, Any] | None = None) -> Any:
        """Execute a command and return the store client's result, or False if the command failed."""
        result = self.try_invoke(command, args, kwargs)
        if not result.ok:
            return False

        return result.value

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        def command(*args: Any, **kwargs: Any) -> Any:
            return self.invoke(name, args, kwargs or None)

        command.__name__ = name
        return command
