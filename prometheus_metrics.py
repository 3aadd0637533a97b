"""
Shiva - Prometheus Metrics
Provides Prometheus-compatible metrics for monitoring and observability.
"""

from prometheus_client import Counter, Histogram, Gauge, start_http_server
import logger as log


# --- Message Metrics ---

# Messages that reached the dispatcher (bots and DMs are filtered out before)
messages_processed = Counter(
    'shiva_messages_processed_total',
    'Total number of guild messages processed',
    ['bot_name']
)

canned_answers = Counter(
    'shiva_canned_answers_total',
    'Identity questions answered without the AI',
    ['bot_name', 'category']  # category: owner, api, name, name_origin
)

responses_generated = Counter(
    'shiva_responses_generated_total',
    'Total number of AI replies sent',
    ['bot_name', 'path']  # path: text, vision
)


# --- API Metrics ---

api_requests = Counter(
    'shiva_gemini_requests_total',
    'Total number of Gemini API requests made',
    ['status']  # status: ok, empty, http_error, transport_error, bad_payload
)

api_request_duration = Histogram(
    'shiva_gemini_request_duration_seconds',
    'Gemini API request duration in seconds',
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0]
)


# --- Cache Metrics ---

activation_lookups = Counter(
    'shiva_activation_lookups_total',
    'Channel activation checks by cache result',
    ['result']  # result: hit, miss, error
)

conversation_channels = Gauge(
    'shiva_conversation_channels',
    'Number of channels with stored conversation context',
    ['bot_name']
)


# --- Error Metrics ---

errors_total = Counter(
    'shiva_errors_total',
    'Total number of errors caught by the dispatcher',
    ['bot_name', 'error_type']
)


# --- Metrics Manager ---

class MetricsManager:
    """Centralized metrics management for Shiva."""

    def __init__(self, metrics_port: int = 0):
        self.metrics_port = metrics_port
        self._started = False

    def start_metrics_server(self, port: int = None):
        """Start the Prometheus metrics HTTP server."""
        if port:
            self.metrics_port = port
        if self._started or not self.metrics_port:
            return

        try:
            start_http_server(self.metrics_port)
            self._started = True
            log.info(f"Prometheus metrics server started on port {self.metrics_port}")
        except Exception as e:
            log.error(f"Failed to start metrics server: {e}")

    def record_message(self, bot_name: str):
        messages_processed.labels(bot_name=bot_name).inc()

    def record_canned_answer(self, bot_name: str, category: str):
        canned_answers.labels(bot_name=bot_name, category=category).inc()

    def record_response(self, bot_name: str, path: str):
        responses_generated.labels(bot_name=bot_name, path=path).inc()

    def record_api_request(self, status: str, duration_seconds: float):
        """Record a Gemini API request."""
        api_requests.labels(status=status).inc()
        api_request_duration.observe(duration_seconds)

    def record_activation_lookup(self, result: str):
        activation_lookups.labels(result=result).inc()

    def update_conversation_channels(self, bot_name: str, count: int):
        conversation_channels.labels(bot_name=bot_name).set(count)

    def record_error(self, bot_name: str, error_type: str):
        errors_total.labels(bot_name=bot_name, error_type=error_type).inc()


# Global metrics manager instance
metrics_manager = MetricsManager()
