from unittest.mock import MagicMock, patch

import pytest

from restbridge.config import PluginConfiguration
from restbridge.plugins.restapi import RestApiPlugin

DEFAULT_USER_AGENT = "restbridge-tests"


@pytest.fixture
def plugin_configuration():
    return PluginConfiguration(
        rest_api_execution_timeout_ms=5000,
        rest_api_max_content_length_bytes=1024,
        default_user_agent=DEFAULT_USER_AGENT,
    )


@pytest.fixture
def plugin(plugin_configuration):
    return RestApiPlugin(plugin_configuration)


def build_response(status_code=200, body=b"", headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers if headers is not None else {}
    response.iter_content.return_value = iter([body] if body else [])
    return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def mock_request():
    """Patches the network call; configure ``return_value`` or ``side_effect``."""
    with patch("restbridge.http_client.requests.request") as mocked:
        mocked.return_value = build_response(
            body=b'{"ok": true}', headers={"Content-Type": "application/json"}
        )
        yield mocked
