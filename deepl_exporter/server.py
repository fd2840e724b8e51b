"""
HTTP server exposing /metrics for Prometheus and /healthz for probes.
"""

import logging
import signal
import threading

from flask import Flask
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from werkzeug.serving import BaseWSGIServer, make_server

from .config import ExporterConfig

logger = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT = 5.0


def create_app(registry: CollectorRegistry) -> Flask:
    app = Flask(__name__)

    @app.route('/metrics')
    def metrics():
        """Prometheus text exposition of everything registered on the registry."""
        return generate_latest(registry), 200, {'Content-Type': CONTENT_TYPE_LATEST}

    @app.route('/healthz')
    def healthz():
        return "ok", 200

    return app


def shutdown_server(
    server: BaseWSGIServer, thread: threading.Thread, timeout: float = SHUTDOWN_TIMEOUT
) -> bool:
    """Stop accepting requests and wait up to ``timeout`` for in-flight ones.

    The serving thread closes the server on its way out, which joins the
    request threads. Returns False when that had not finished by the deadline.
    """
    server.shutdown()
    thread.join(timeout)
    return not thread.is_alive()


def serve(config: ExporterConfig, registry: CollectorRegistry) -> None:
    """Serve until SIGINT or SIGTERM, then shut down gracefully."""
    server = make_server(config.host, config.port, create_app(registry), threaded=True)
    # Keep request threads joinable so shutdown drains them
    server.daemon_threads = False

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    logger.info("Starting DeepL Prometheus exporter on port %d", config.port)
    logger.info("Metrics available at http://localhost:%d/metrics", config.port)

    stop = threading.Event()

    def _handle_signal(signum, _frame):
        logger.info("Received %s", signal.Signals(signum).name)
        stop.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)
    stop.wait()

    logger.info("Shutting down server...")
    if not shutdown_server(server, thread):
        logger.warning(
            "In-flight requests still running after %.0fs; exit waits for them",
            SHUTDOWN_TIMEOUT,
        )
    logger.info("Server exited")
