"""Prometheus collector exposing DeepL character usage."""

import asyncio
import logging
from typing import Iterator

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from .errors import UsageError
from .models import UsageSnapshot
from .providers.base import BaseProvider

logger = logging.getLogger(__name__)

CHARACTER_COUNT = "deepl_character_count"
CHARACTER_LIMIT = "deepl_character_limit"
CHARACTER_USAGE_PERCENT = "deepl_character_usage_percent"

METRIC_HELP = {
    CHARACTER_COUNT: "Current number of characters translated in the current billing period",
    CHARACTER_LIMIT: "Maximum number of characters that can be translated in the current billing period",
    CHARACTER_USAGE_PERCENT: "Percentage of character limit used",
}


class DeepLCollector(Collector):
    """
    Fetches usage on every scrape and yields it as three gauges.

    A failed fetch is logged and yields no metrics at all for that scrape,
    so the series go absent instead of the /metrics endpoint failing.
    Each scrape runs its own event loop, so the provider opens a fresh HTTP
    client per fetch rather than sharing one across scrapes.
    """

    def __init__(self, provider: BaseProvider):
        self.provider = provider
        self.provider.authenticate()

    def describe(self) -> Iterator[GaugeMetricFamily]:
        for name, documentation in METRIC_HELP.items():
            yield GaugeMetricFamily(name, documentation)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        try:
            usage = asyncio.run(self.provider.get_usage())
        except UsageError as e:
            logger.error("Error fetching DeepL usage: %s", e)
            return

        yield from self._to_metrics(usage)

    def _to_metrics(self, usage: UsageSnapshot) -> Iterator[GaugeMetricFamily]:
        values = {
            CHARACTER_COUNT: float(usage.character_count),
            CHARACTER_LIMIT: float(usage.character_limit),
            CHARACTER_USAGE_PERCENT: usage.usage_percent,
        }
        for name, value in values.items():
            yield GaugeMetricFamily(name, METRIC_HELP[name], value=value)

    def samples(self) -> list[tuple[str, float]]:
        """Run one collection cycle and return its (name, value) pairs in order."""
        return [
            (sample.name, sample.value)
            for family in self.collect()
            for sample in family.samples
        ]
