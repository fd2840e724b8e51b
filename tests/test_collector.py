import logging

import httpx
import pytest
from prometheus_client import CollectorRegistry
from deepl_exporter.collector import DeepLCollector
from deepl_exporter.models import UsageSnapshot


def test_collector_collect(make_provider, usage_handler):
    collector = DeepLCollector(make_provider(usage_handler))

    assert collector.samples() == [
        ("deepl_character_count", 1000.0),
        ("deepl_character_limit", 500000.0),
        ("deepl_character_usage_percent", pytest.approx(0.2)),
    ]


def test_collector_metrics_are_gauges(make_provider, usage_handler):
    collector = DeepLCollector(make_provider(usage_handler))
    families = list(collector.collect())

    assert len(families) == 3
    assert all(family.type == "gauge" for family in families)
    assert all(len(family.samples) == 1 for family in families)


def test_collector_zero_limit(make_provider):
    def handler(request):
        return httpx.Response(200, json={"character_count": 1000, "character_limit": 0})

    collector = DeepLCollector(make_provider(handler))
    samples = dict(collector.samples())
    assert samples["deepl_character_usage_percent"] == 0.0


def test_collector_usage_above_limit(make_provider):
    def handler(request):
        return httpx.Response(200, json={"character_count": 750, "character_limit": 500})

    collector = DeepLCollector(make_provider(handler))
    samples = dict(collector.samples())
    assert samples["deepl_character_usage_percent"] == pytest.approx(150.0)


def test_collector_status_error_yields_nothing(make_provider, caplog):
    def handler(request):
        return httpx.Response(500, text="internal error")

    collector = DeepLCollector(make_provider(handler))
    with caplog.at_level(logging.ERROR, logger="deepl_exporter.collector"):
        assert list(collector.collect()) == []

    assert "API returned status 500: internal error" in caplog.text


def test_collector_malformed_body_yields_nothing(make_provider):
    def handler(request):
        return httpx.Response(200, text="not json")

    collector = DeepLCollector(make_provider(handler))
    assert collector.samples() == []


def test_collector_fetches_on_every_scrape(make_provider):
    counts = iter([10, 20])

    def handler(request):
        return httpx.Response(200, json={"character_count": next(counts), "character_limit": 100})

    collector = DeepLCollector(make_provider(handler))
    assert dict(collector.samples())["deepl_character_count"] == 10.0
    assert dict(collector.samples())["deepl_character_count"] == 20.0


def test_collector_describe_does_not_fetch(make_provider):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    collector = DeepLCollector(make_provider(handler))
    described = list(collector.describe())

    assert [family.name for family in described] == [
        "deepl_character_count",
        "deepl_character_limit",
        "deepl_character_usage_percent",
    ]
    assert all(family.samples == [] for family in described)
    assert all(family.documentation for family in described)

    CollectorRegistry().register(collector)
    assert calls == []


def test_usage_snapshot_percent():
    assert UsageSnapshot(character_count=1000, character_limit=500000).usage_percent == pytest.approx(0.2)
    assert UsageSnapshot(character_count=5, character_limit=0).usage_percent == 0.0
    assert UsageSnapshot(character_count=5, character_limit=-1).usage_percent == 0.0
    assert UsageSnapshot().usage_percent == 0.0


@pytest.mark.parametrize(
    "body",
    [
        '{"character_count": "1000", "character_limit": 500000}',
        '{"character_count": true, "character_limit": 500000}',
        '{"character_count": 1000.0, "character_limit": 500000}',
    ],
)
def test_collector_wrongly_typed_field_yields_nothing(make_provider, body):
    def handler(request):
        return httpx.Response(200, text=body)

    collector = DeepLCollector(make_provider(handler))
    assert collector.samples() == []


def test_collector_null_field_is_zero(make_provider):
    def handler(request):
        return httpx.Response(200, text='{"character_count": null, "character_limit": 500000}')

    collector = DeepLCollector(make_provider(handler))
    assert collector.samples() == [
        ("deepl_character_count", 0.0),
        ("deepl_character_limit", 500000.0),
        ("deepl_character_usage_percent", 0.0),
    ]
