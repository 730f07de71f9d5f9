from collections.abc import Iterator

import pytest

from namespaced_redis.config import PrefixConfig, default_prefix_config
from tests.fakes import MockLogger, MockRedis, RecordingClientFactory


@pytest.fixture(autouse=True)
def reset_default_prefix() -> Iterator[None]:
    """Restore the process-wide default prefix after every test."""
    try:
        yield
    finally:
        default_prefix_config.reset()


@pytest.fixture
def client_factory() -> RecordingClientFactory:
    return RecordingClientFactory()


@pytest.fixture
def prefix_config() -> PrefixConfig:
    return PrefixConfig()


@pytest.fixture
def mock_logger() -> MockLogger:
    return MockLogger()


@pytest.fixture
def mock_redis() -> MockRedis:
    return MockRedis()
