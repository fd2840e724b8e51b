import asyncio
import logging

import httpx
from pydantic import ValidationError

from ..errors import UsageDecodeError, UsageError, UsageStatusError, UsageTransportError
from ..models import UsageSnapshot
from .base import BaseProvider

logger = logging.getLogger(__name__)

FREE_KEY_SUFFIX = ":fx"


def is_free_key(api_key: str) -> bool:
    """Free API keys carry a ":fx" suffix after the key itself."""
    return len(api_key) > len(FREE_KEY_SUFFIX) and api_key.endswith(FREE_KEY_SUFFIX)


class DeepLProvider(BaseProvider):
    """DeepL API character usage provider."""

    PRO_API_URL = "https://api.deepl.com/v2/usage"
    FREE_API_URL = "https://api-free.deepl.com/v2/usage"
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(api_key)
        self.timeout = timeout
        self._transport = transport
        if is_free_key(api_key):
            self.tier = "free"
            self.api_url = self.FREE_API_URL
        else:
            self.tier = "pro"
            self.api_url = self.PRO_API_URL
        logger.info("Detected DeepL %s API key", self.tier.capitalize())

    @property
    def name(self) -> str:
        return "deepl"

    def authenticate(self) -> None:
        """Setup DeepL-Auth-Key authentication via Authorization header."""
        self._headers = {
            "Authorization": f"DeepL-Auth-Key {self.api_key}",
        }

    async def fetch_usage(self) -> dict:
        """Fetch usage data from the DeepL API.

        The whole exchange is bounded by ``self.timeout``; a slow upstream is
        reported as a transport error rather than stalling the caller.
        """
        try:
            return await asyncio.wait_for(self._request_usage(), self.timeout)
        except asyncio.TimeoutError as e:
            raise UsageTransportError(
                f"failed to fetch usage: timed out after {self.timeout}s"
            ) from e

    async def _request_usage(self) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                request = client.build_request("GET", self.api_url, headers=self._headers)
            except (httpx.InvalidURL, ValueError) as e:
                raise UsageError(f"failed to create request: {e}") from e

            try:
                response = await client.send(request)
            except httpx.HTTPError as e:
                raise UsageTransportError(f"failed to fetch usage: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise UsageStatusError(response.status_code, response.text)

        try:
            return response.json()  # type: ignore[no-any-return]
        except ValueError as e:
            raise UsageDecodeError(f"failed to parse response: {e}") from e

    def parse_usage(self, raw_data: dict) -> UsageSnapshot:
        """Parse DeepL response into a UsageSnapshot."""
        try:
            return UsageSnapshot.model_validate(raw_data)
        except ValidationError as e:
            raise UsageDecodeError(f"failed to parse response: {e}") from e
