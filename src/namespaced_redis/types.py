from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Authentication details for a Redis server."""

    model_config = ConfigDict(frozen=True)

    user: str | None = None
    password: str | None = None


class ConnectionParameters(BaseModel):
    """Normalized parameters for connecting to a single Redis server.

    Attributes:
        host: The server hostname or address. Never empty.
        port: The server port.
        database: The database index to select, or None when no database was specified.
            None is distinct from 0: no SELECT is issued for None.
        credentials: Optional authentication details.
        options: Supplementary client options, such as those found in a descriptor's query string.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    port: int = Field(ge=0)
    database: int | None = Field(default=None, ge=0)
    credentials: Credentials | None = None
    options: dict[str, str] = Field(default_factory=dict)


@runtime_checkable
class StoreClient(Protocol):
    """Protocol for the store client a facade dispatches commands to."""

    def call(self, command: str, args: Sequence[Any], kwargs: Mapping[str, Any] | None = None) -> Any:
        """Execute a named command with the given arguments and return the raw result."""
        ...


@runtime_checkable
class CriticalLogger(Protocol):
    """Protocol for loggers that can be attached to a facade."""

    def critical(self, msg: str, /, *args: Any, **kwargs: Any) -> Any: ...


@dataclass(frozen=True)
class CommandResult:
    """The outcome of a dispatched command: either a value or the error that prevented it."""

    command: str
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        """Check if the command completed without a contained fault."""
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value of a successful command, re-raising the contained fault otherwise."""
        if self.error is not None:
            raise self.error

        return self.value
