import httpx
import pytest
from deepl_exporter.providers.deepl import DeepLProvider


@pytest.fixture
def make_provider():
    """Build a provider whose requests are answered by ``handler``."""
    def _make(handler, api_key="test-key", timeout=DeepLProvider.DEFAULT_TIMEOUT):
        provider = DeepLProvider(api_key, timeout=timeout, transport=httpx.MockTransport(handler))
        provider.authenticate()
        return provider
    return _make


@pytest.fixture
def sample_usage_response():
    return {"character_count": 1000, "character_limit": 500000}


@pytest.fixture
def usage_handler(sample_usage_response):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.headers.get("Authorization") != "DeepL-Auth-Key test-key":
            return httpx.Response(401)
        return httpx.Response(200, json=sample_usage_response)
    return handler
