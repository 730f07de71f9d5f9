"""Rewriting of command arguments so that every key carries the namespace prefix.

Each command is mapped to a strategy describing which of its positional arguments are keys. Keyword
arguments that name keys, such as ``name`` or ``store``, are prefixed for the same commands.
Commands without a strategy are passed through unchanged.
"""

from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Any


class KeyStrategy(Enum):
    """Positions of the key arguments of a command."""

    FIRST = "first"  # The first argument is a key, or a list or mapping of keys
    SECOND = "second"  # The second argument is a key
    THIRD = "third"  # The third argument is a key, or a mapping of keys
    FIRST_TWO = "first_two"  # The first two arguments are keys
    ALL = "all"  # Every string argument is a key
    SKIP_FIRST = "skip_first"  # Every string argument after the first is a key
    NUMKEYS_FIRST = "numkeys_first"  # A key count, then the keys
    NUMKEYS_SECOND = "numkeys_second"  # Another argument, a key count, then the keys
    SORT = "sort"  # A key followed by SORT's BY and GET patterns and STORE key


_FIRST_COMMANDS = """
    get set setnx setex psetex append strlen incr incrby incrbyfloat decr decrby getset getdel getex
    getrange setrange substr getbit setbit bitcount bitpos bitfield
    expire expireat pexpire pexpireat expiretime pexpiretime ttl pttl persist type dump restore move keys
    mset msetnx memory_usage
    lpush rpush lpushx rpushx llen lrange ltrim lindex lset lrem lpop rpop linsert lpos
    sadd srem scard sismember smismember smembers spop srandmember sscan sscan_iter
    zadd zincrby zrem zrange zrevrange zrangebyscore zrevrangebyscore zrangebylex zrevrangebylex zcard zscore
    zmscore zcount zlexcount zrank zrevrank zremrangebyrank zremrangebyscore zremrangebylex zpopmin zpopmax
    zrandmember zscan zscan_iter zinter zunion zdiff
    hset hsetnx hget hmset hmget hincrby hincrbyfloat hdel hexists hlen hkeys hvals hgetall hstrlen hrandfield
    hscan hscan_iter
    pfadd geoadd geodist geohash geopos georadius georadiusbymember geosearch
    xadd xlen xrange xrevrange xdel xtrim xack xread xpending xpending_range xclaim xautoclaim
    xgroup_create xgroup_createconsumer xgroup_delconsumer xgroup_destroy xgroup_setid
    xinfo_consumers xinfo_groups xinfo_stream
"""

_SECOND_COMMANDS = "object"

_THIRD_COMMANDS = "xreadgroup"

_FIRST_TWO_COMMANDS = """
    rename renamenx rpoplpush smove brpoplpush lmove blmove copy zunionstore zinterstore zdiffstore zrangestore
    geosearchstore
"""

_ALL_COMMANDS = """
    delete del exists touch unlink mget sinter sunion sdiff sinterstore sunionstore sdiffstore watch
    pfcount pfmerge blpop brpop bzpopmin bzpopmax
"""

_SKIP_FIRST_COMMANDS = "bitop"

_NUMKEYS_FIRST_COMMANDS = "sintercard zintercard lmpop zmpop"

_NUMKEYS_SECOND_COMMANDS = "eval evalsha eval_ro evalsha_ro fcall fcall_ro blmpop bzmpop"

_SORT_COMMANDS = "sort sort_ro"


def _table(*groups: tuple[KeyStrategy, str]) -> dict[str, KeyStrategy]:
    table: dict[str, KeyStrategy] = {}
    for strategy, commands in groups:
        for command in commands.split():
            table[command] = strategy
    return table


COMMAND_KEY_STRATEGIES: dict[str, KeyStrategy] = _table(
    (KeyStrategy.FIRST, _FIRST_COMMANDS),
    (KeyStrategy.SECOND, _SECOND_COMMANDS),
    (KeyStrategy.THIRD, _THIRD_COMMANDS),
    (KeyStrategy.FIRST_TWO, _FIRST_TWO_COMMANDS),
    (KeyStrategy.ALL, _ALL_COMMANDS),
    (KeyStrategy.SKIP_FIRST, _SKIP_FIRST_COMMANDS),
    (KeyStrategy.NUMKEYS_FIRST, _NUMKEYS_FIRST_COMMANDS),
    (KeyStrategy.NUMKEYS_SECOND, _NUMKEYS_SECOND_COMMANDS),
    (KeyStrategy.SORT, _SORT_COMMANDS),
)

# Keyword arguments that hold keys for every command in the table
KEYWORD_KEYS: tuple[str, ...] = ("name", "names", "keys", "streams")

# Keyword arguments that hold keys for specific commands
COMMAND_KEYWORD_KEYS: dict[str, tuple[str, ...]] = {
    "rename": ("src", "dst"),
    "renamenx": ("src", "dst"),
    "rpoplpush": ("src", "dst"),
    "brpoplpush": ("src", "dst"),
    "smove": ("src", "dst"),
    "lmove": ("first_list", "second_list"),
    "blmove": ("first_list", "second_list"),
    "copy": ("source", "destination"),
    "zunionstore": ("dest",),
    "zinterstore": ("dest",),
    "zdiffstore": ("dest",),
    "zrangestore": ("dest",),
    "geosearchstore": ("dest",),
    "bitop": ("dest",),
    "pfmerge": ("dest", "sources"),
    "georadius": ("store", "store_dist"),
    "georadiusbymember": ("store", "store_dist"),
    "object": ("key",),
    "memory_usage": ("key",),
    "sort": ("store",),
}

# SORT's BY and GET take key patterns; "#" stands for the element itself
SORT_PATTERN_KEYWORDS: tuple[str, ...] = ("by", "get")
_SORT_PATTERN_POSITIONS: tuple[int, ...] = (3, 4)
_SORT_STORE_POSITION = 7
_SORT_ELEMENT_PATTERNS = ("#", b"#")


def prefix_key(key: Any, prefix: str) -> Any:
    """Prefix a key, or every key held in a list, tuple or mapping.

    Values that cannot be keys, such as numbers, are returned unchanged.
    """
    if isinstance(key, str):
        return prefix + key
    if isinstance(key, bytes):
        return prefix.encode() + key
    if isinstance(key, Mapping):
        return {prefix_key(key=k, prefix=prefix): v for k, v in key.items()}  # pyright: ignore[reportUnknownVariableType]
    if isinstance(key, list | tuple):
        return type(key)(prefix_key(key=k, prefix=prefix) for k in key)  # pyright: ignore[reportUnknownArgumentType]
    return key


def _prefix_pattern(pattern: Any, prefix: str) -> Any:
    if isinstance(pattern, list | tuple):
        return type(pattern)(_prefix_pattern(pattern=p, prefix=prefix) for p in pattern)  # pyright: ignore[reportUnknownArgumentType]
    if pattern in _SORT_ELEMENT_PATTERNS:
        return pattern
    return prefix_key(key=pattern, prefix=prefix)


def _prefix_positions(args: list[Any], prefix: str, start: int, stop: int | None) -> list[Any]:
    stop = len(args) if stop is None else min(stop, len(args))
    for i in range(start, stop):
        args[i] = prefix_key(key=args[i], prefix=prefix)
    return args


def _prefix_counted(args: list[Any], prefix: str, count_index: int) -> list[Any]:
    if len(args) <= count_index:
        return args

    try:
        numkeys = int(args[count_index])
    except (TypeError, ValueError):
        return args

    start = count_index + 1

    # redis-py passes the keys of some counted commands as a single list
    if start < len(args) and isinstance(args[start], list | tuple):
        return _prefix_positions(args, prefix=prefix, start=start, stop=start + 1)

    return _prefix_positions(args, prefix=prefix, start=start, stop=start + numkeys)


def _prefix_sort(args: list[Any], prefix: str) -> list[Any]:
    args = _prefix_positions(args, prefix=prefix, start=0, stop=1)
    for i in _SORT_PATTERN_POSITIONS:
        if i < len(args):
            args[i] = _prefix_pattern(pattern=args[i], prefix=prefix)
    return _prefix_positions(args, prefix=prefix, start=_SORT_STORE_POSITION, stop=_SORT_STORE_POSITION + 1)


_STRATEGY_HANDLERS: dict[KeyStrategy, Callable[[list[Any], str], list[Any]]] = {
    KeyStrategy.FIRST: lambda args, prefix: _prefix_positions(args, prefix=prefix, start=0, stop=1),
    KeyStrategy.SECOND: lambda args, prefix: _prefix_positions(args, prefix=prefix, start=1, stop=2),
    KeyStrategy.THIRD: lambda args, prefix: _prefix_positions(args, prefix=prefix, start=2, stop=3),
    KeyStrategy.FIRST_TWO: lambda args, prefix: _prefix_positions(args, prefix=prefix, start=0, stop=2),
    KeyStrategy.ALL: lambda args, prefix: _prefix_positions(args, prefix=prefix, start=0, stop=None),
    KeyStrategy.SKIP_FIRST: lambda args, prefix: _prefix_positions(args, prefix=prefix, start=1, stop=None),
    KeyStrategy.NUMKEYS_FIRST: lambda args, prefix: _prefix_counted(args, prefix=prefix, count_index=0),
    KeyStrategy.NUMKEYS_SECOND: lambda args, prefix: _prefix_counted(args, prefix=prefix, count_index=1),
    KeyStrategy.SORT: _prefix_sort,
}


def prefix_command_args(command: str, args: Sequence[Any], prefix: str) -> list[Any]:
    """Return a copy of a command's arguments with the prefix applied to its keys.

    Args:
        command: The command name, in any case.
        args: The positional arguments of the command.
        prefix: The prefix to apply. An empty prefix leaves the arguments unchanged.
    """
    new_args: list[Any] = list(args)

    if not prefix:
        return new_args

    strategy: KeyStrategy | None = COMMAND_KEY_STRATEGIES.get(command.lower())
    if strategy is None:
        return new_args

    return _STRATEGY_HANDLERS[strategy](new_args, prefix)


def prefix_command_kwargs(command: str, kwargs: Mapping[str, Any] | None, prefix: str) -> dict[str, Any]:
    """Return a copy of a command's keyword arguments with the prefix applied to those that hold keys."""
    new_kwargs: dict[str, Any] = dict(kwargs or {})

    name = command.lower()
    if not prefix or name not in COMMAND_KEY_STRATEGIES:
        return new_kwargs

    for keyword in (*KEYWORD_KEYS, *COMMAND_KEYWORD_KEYS.get(name, ())):
        if keyword in new_kwargs:
            new_kwargs[keyword] = prefix_key(key=new_kwargs[keyword], prefix=prefix)

    if COMMAND_KEY_STRATEGIES[name] is KeyStrategy.SORT:
        for keyword in SORT_PATTERN_KEYWORDS:
            if keyword in new_kwargs:
                new_kwargs[keyword] = _prefix_pattern(pattern=new_kwargs[keyword], prefix=prefix)

    return new_kwargs
