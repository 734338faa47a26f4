import os
import sys

import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from fastapi.testclient import TestClient  # noqa: E402

from appleui_mcp.config import ServerConfig  # noqa: E402
from appleui_mcp.metrics import default_metrics  # noqa: E402
from appleui_mcp.server import create_app  # noqa: E402

VALID_KEY = "appleui_sk_" + "a" * 64


def make_config(**overrides) -> ServerConfig:
    values = {
        "transport": "stateless",
        "require_api_key": False,
        "api_keys": [],
        "auth_url": None,
        "sse_heartbeat": 0.01,
    }
    values.update(overrides)
    return ServerConfig(**values)


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


@pytest.fixture
def stateless_client():
    return TestClient(create_app(make_config()))


@pytest.fixture
def stateful_app():
    return create_app(make_config(transport="stateful"))


@pytest.fixture
def stateful_client(stateful_app):
    return TestClient(stateful_app)


@pytest.fixture
def keyed_client():
    return TestClient(create_app(make_config(require_api_key=True, api_keys=[VALID_KEY])))
