"""Configure pytest environment for all tests."""

import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.absolute()
SRC_PATH = PROJECT_ROOT / "src"

for path in (str(SRC_PATH), str(PROJECT_ROOT)):
    if path not in sys.path:
        sys.path.insert(0, path)

from llmcatalog.core.config.schema import ProviderSettings  # noqa: E402
from tests.helpers.discovery_doubles import InMemoryModelCache  # noqa: E402


@pytest.fixture
def memory_cache():
    return InMemoryModelCache()


@pytest.fixture
def make_settings():
    """Build ProviderSettings from camelCase keys, as provider files spell them."""

    def factory(**overrides):
        data = {"model": {"default": "base-model"}, "stream": True, "jsonMode": False}
        data.update(overrides)
        return ProviderSettings.model_validate(data)

    return factory


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger("llmcatalog")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
