from collections.abc import Callable
from typing import Any, TypeVar

from beartype import BeartypeConf, BeartypeStrategy, beartype

F = TypeVar("F", bound=Callable[..., Any])

enforce_bear_type_conf = BeartypeConf(strategy=BeartypeStrategy.O1)

no_bear_type_check_conf = BeartypeConf(strategy=BeartypeStrategy.O0)

enforce_bear_type = beartype(conf=enforce_bear_type_conf)

no_bear_type = beartype(conf=no_bear_type_check_conf)


def bear_enforce(func: F) -> F:
    """Check the call's arguments and return value against the function's annotations."""
    return enforce_bear_type(func)


def bear_spray(func: F) -> F:
    """Skip runtime type checking, for callables whose overloads beartype cannot reconcile."""
    return no_bear_type(func)
