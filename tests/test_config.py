import threading

import pytest

from namespaced_redis.config import DEFAULT_PREFIX, PrefixConfig, default_prefix_config, normalize_prefix


@pytest.mark.parametrize(
    ("namespace", "expected"),
    [
        ("myapp", "myapp:"),
        ("myapp:", "myapp:"),
        ("a:b", "a:b:"),
        ("", ":"),
        ("trailing::", "trailing::"),
    ],
    ids=["no-separator", "has-separator", "nested", "empty", "double-separator"],
)
def test_normalize_prefix(namespace: str, expected: str) -> None:
    assert normalize_prefix(namespace) == expected


def test_default_prefix() -> None:
    assert DEFAULT_PREFIX == "resque:"
    assert PrefixConfig().prefix == DEFAULT_PREFIX
    assert default_prefix_config.prefix == DEFAULT_PREFIX


def test_prefix_config_normalizes_initial_prefix() -> None:
    assert PrefixConfig(prefix="jobs").prefix == "jobs:"


def test_set_prefix(prefix_config: PrefixConfig) -> None:
    prefix_config.set_prefix("myapp")
    assert prefix_config.prefix == "myapp:"

    prefix_config.set_prefix("other:")
    assert prefix_config.prefix == "other:"

    prefix_config.reset()
    assert prefix_config.prefix == DEFAULT_PREFIX


def test_prefix_configs_are_independent(prefix_config: PrefixConfig) -> None:
    prefix_config.set_prefix("isolated")

    assert prefix_config.prefix == "isolated:"
    assert default_prefix_config.prefix == DEFAULT_PREFIX


def test_concurrent_set_prefix_leaves_a_written_value(prefix_config: PrefixConfig) -> None:
    namespaces = [f"tenant{i}" for i in range(20)]

    threads = [threading.Thread(target=prefix_config.set_prefix, args=(namespace,)) for namespace in namespaces]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert prefix_config.prefix in {f"{namespace}:" for namespace in namespaces}
