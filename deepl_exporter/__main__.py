import argparse
import asyncio
import logging
import sys

from prometheus_client import CollectorRegistry

from .collector import DeepLCollector
from .config import load_config
from .errors import ConfigError, UsageError
from .formatter import format_usage_simple
from .providers.deepl import DeepLProvider
from .server import serve

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger('werkzeug').setLevel(logging.WARNING)


async def fetch_once(provider: DeepLProvider) -> int:
    """Fetch usage a single time and print it."""
    provider.authenticate()
    try:
        usage = await provider.get_usage()
    except UsageError as e:
        print(f"Error fetching DeepL usage: {e}", file=sys.stderr)
        return 1

    print(format_usage_simple(usage, provider.tier))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Export DeepL API character usage as Prometheus metrics."
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: $PORT or 1818)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print current usage and exit instead of serving metrics",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(port=args.port)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level)
    provider = DeepLProvider(config.api_key)

    if args.once:
        return asyncio.run(fetch_once(provider))

    registry = CollectorRegistry()
    registry.register(DeepLCollector(provider))
    serve(config, registry)
    return 0


def cli() -> None:
    """Synchronous entry point for CLI."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
