import logging
from collections.abc import Mapping, Sequence
from typing import Any

from redis import Redis
from redis.cluster import ClusterNode, RedisCluster
from typing_extensions import Self

from namespaced_redis.dsn import parse_dsn
from namespaced_redis.errors import ConfigurationError, UnsupportedTopologyError
from namespaced_redis.prefixing import prefix_command_args, prefix_command_kwargs
from namespaced_redis.types import ConnectionParameters

logger = logging.getLogger(__name__)

ServerType = str | ConnectionParameters | Mapping[str, Any] | Sequence[Any] | Redis | RedisCluster

# Redis command names that are not valid Python method names on the client
COMMAND_ALIASES: dict[str, str] = {"del": "delete"}


def _cluster_node(node: Any) -> ClusterNode:  # pyright: ignore[reportAny]
    if isinstance(node, ClusterNode):
        return node
    if isinstance(node, str):
        node = parse_dsn(node)
    if isinstance(node, ConnectionParameters):
        return ClusterNode(host=node.host, port=node.port)
    if isinstance(node, Mapping):
        return ClusterNode(**node)  # pyright: ignore[reportUnknownArgumentType]

    msg = f"Unsupported cluster node: {node!r}"
    raise ConfigurationError(message=msg)


class PrefixedRedisClient:
    """A Redis client that prefixes the keys of every command it executes.

    Commands are looked up by name on the wrapped redis-py client. Commands that redis-py does not expose
    are sent with ``execute_command``.
    """

    def __init__(self, client: Redis | RedisCluster, prefix: str = "") -> None:
        """Initialize the prefixed client.

        Args:
            client: The redis-py client to send commands to.
            prefix: The prefix to add to every key. Defaults to no prefix.
        """
        self._client: Redis | RedisCluster = client
        self._prefix: str = prefix

    @property
    def redis(self) -> Redis | RedisCluster:
        return self._client

    @property
    def prefix(self) -> str:
        return self._prefix

    @classmethod
    def from_server(cls, server: ServerType, *, prefix: str = "", **options: Any) -> Self:
        """Create a prefixed client for a server description.

        Args:
            server: A descriptor string, connection parameters, a mapping of redis-py client arguments,
                a sequence of cluster nodes, or an existing redis-py client.
            prefix: The prefix to add to every key.
            **options: Additional arguments for the redis-py client.
        """
        if isinstance(server, Redis | RedisCluster):
            return cls(client=server, prefix=prefix)

        if isinstance(server, str):
            server = parse_dsn(server)

        if isinstance(server, ConnectionParameters):
            credentials = server.credentials
            client = Redis(
                host=server.host,
                port=server.port,
                db=server.database or 0,
                username=credentials.user if credentials else None,
                password=credentials.password if credentials else None,
                **options,
            )
            return cls(client=client, prefix=prefix)

        if isinstance(server, Mapping):
            return cls(client=Redis(**{**server, **options}), prefix=prefix)

        if isinstance(server, Sequence):  # pyright: ignore[reportUnnecessaryIsInstance]
            startup_nodes = [_cluster_node(node) for node in server]  # pyright: ignore[reportUnknownVariableType]
            logger.debug(f"Creating cluster client with {len(startup_nodes)} startup nodes")
            return cls(client=RedisCluster(startup_nodes=startup_nodes, **options), prefix=prefix)

        msg = f"Unsupported server description: {server!r}"
        raise ConfigurationError(message=msg)

    def select(self, index: int) -> bool:
        """Use the given database for all subsequent commands.

        redis-py binds the database to each pooled connection, so the pool is reconfigured and its
        connections are dropped; new connections select the database when they connect.

        Raises:
            UnsupportedTopologyError: If the client is a cluster client, which only has database 0.
        """
        if isinstance(self._client, RedisCluster):
            raise UnsupportedTopologyError(operation="select", topology="cluster")

        pool = self._client.connection_pool
        pool.connection_kwargs["db"] = index
        pool.disconnect()

        logger.debug(f"Selected database {index}")
        return True

    def call(self, command: str, args: Sequence[Any], kwargs: Mapping[str, Any] | None = None) -> Any:
        """Execute a command, prefixing its key arguments.

        Keys are prefixed in positional arguments and in the keyword arguments that name keys, such as ``name``
        or ``store``.
        """
        name = command.lower()
        name = COMMAND_ALIASES.get(name, name)

        if name == "select":
            return self.select(*args)

        prefixed_args = prefix_command_args(command=name, args=args, prefix=self._prefix)
        prefixed_kwargs = prefix_command_kwargs(command=name, kwargs=kwargs, prefix=self._prefix)

        method = None if name.startswith("_") else getattr(self._client, name, None)
        if not callable(method):
            return self._client.execute_command(command.upper(), *prefixed_args, **prefixed_kwargs)  # pyright: ignore[reportUnknownMemberType]

        return method(*prefixed_args, **prefixed_kwargs)
