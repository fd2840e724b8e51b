from abc import ABC, abstractmethod
from ..models import UsageSnapshot


class BaseProvider(ABC):
    """Abstract base class for usage providers."""

    def __init__(self, api_key: str):
        self.api_key = api_key
        self._headers: dict[str, str] = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    def authenticate(self) -> None:
        """Setup authentication headers/credentials."""
        pass

    @abstractmethod
    async def fetch_usage(self) -> dict:
        """Call provider API and return raw response data."""
        pass

    @abstractmethod
    def parse_usage(self, raw_data: dict) -> UsageSnapshot:
        """Convert raw response to a UsageSnapshot."""
        pass

    async def get_usage(self) -> UsageSnapshot:
        """Fetch and parse usage in one step."""
        raw_data = await self.fetch_usage()
        return self.parse_usage(raw_data)
