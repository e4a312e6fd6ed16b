"""Prometheus metrics instrumentation for friendships and reservations.

Metrics are exposed via HTTP on METRICS_PORT when it is non-zero.

Metrics exported:
- friendship_transitions_total: Counter of friendship actions by outcome
- reservation_attempts_total: Counter of reserve/unreserve calls by outcome

Usage:
    from wishnest.services.metrics import start_metrics_server, reservation_attempts

    start_metrics_server(port=8001)
    reservation_attempts.labels(action='reserve', outcome='ok').inc()
"""

from prometheus_client import Counter, start_http_server
import logging

logger = logging.getLogger(__name__)

# action: request, rerequest, accept, reject, remove
# outcome: ok or an ErrorKind value
friendship_transitions = Counter(
    'friendship_transitions_total',
    'Friendship state machine transitions',
    labelnames=['action', 'outcome']
)

# action: reserve, unreserve
# outcome: ok or an ErrorKind value
reservation_attempts = Counter(
    'reservation_attempts_total',
    'Reservation slot claims and releases',
    labelnames=['action', 'outcome']
)


def start_metrics_server(port: int = 8001):
    """Start Prometheus metrics HTTP server."""
    try:
        start_http_server(port)
        logger.info(f"✅ Metrics server started on port {port}")
    except OSError as e:
        logger.error(f"❌ Failed to start metrics server: {e}")
