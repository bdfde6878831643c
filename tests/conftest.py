import pytest

from saleind.core.config import IndexerConfig
from tests.factories import make_config


@pytest.fixture
def config() -> IndexerConfig:
    return make_config()
