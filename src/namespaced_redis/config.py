import logging
import threading

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = ":"

DEFAULT_PREFIX = "resque:"


def normalize_prefix(namespace: str) -> str:
    """Ensure a namespace ends with the namespace separator."""
    if not namespace.endswith(NAMESPACE_SEPARATOR):
        namespace += NAMESPACE_SEPARATOR
    return namespace


class PrefixConfig:
    """Holds the default key prefix for facades that are not given one explicitly.

    The prefix is read once when a facade is constructed. Changing it afterwards only affects
    facades constructed later.
    """

    def __init__(self, prefix: str = DEFAULT_PREFIX) -> None:
        self._lock: threading.Lock = threading.Lock()
        self._prefix: str = normalize_prefix(prefix)

    @property
    def prefix(self) -> str:
        with self._lock:
            return self._prefix

    def set_prefix(self, namespace: str) -> None:
        """Set the default prefix, appending the namespace separator if it is missing."""
        prefix = normalize_prefix(namespace)
        with self._lock:
            self._prefix = prefix
        logger.debug(f"Default key prefix set to {prefix!r}")

    def reset(self) -> None:
        """Restore the built-in default prefix."""
        self.set_prefix(DEFAULT_PREFIX)


default_prefix_config = PrefixConfig()
