class ConfigError(Exception):
    """Invalid or missing exporter configuration."""


class UsageError(Exception):
    """Fetching usage from the upstream API failed."""


class UsageTransportError(UsageError):
    """The request could not be completed (DNS, connection, timeout)."""


class UsageStatusError(UsageError):
    """The API answered with a status other than 200."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API returned status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class UsageDecodeError(UsageError):
    """The response body could not be parsed."""
