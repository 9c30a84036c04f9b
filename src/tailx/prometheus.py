"""Prometheus metrics for the tailx API server"""

from prometheus_client import Counter, Histogram

sources_total = Counter('tailx_sources_total', 'Sources tailed', ['unit', 'status'])

bytes_emitted_total = Counter('tailx_bytes_emitted_total', 'Bytes emitted by tail requests', ['unit'])

http_responses_total = Counter('tailx_http_responses_total', 'HTTP responses', ['method', 'endpoint', 'status'])

request_duration_seconds = Histogram(
    'tailx_request_duration_seconds',
    'Time spent handling tail requests',
    ['endpoint'],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.5, 1, 5, 10, 30),
)


def record_http_response(method: str, endpoint: str, status: int) -> None:
    http_responses_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()


def record_source(unit: str, failed: bool, emitted_bytes: int = 0) -> None:
    sources_total.labels(unit=unit, status='failed' if failed else 'ok').inc()
    if emitted_bytes:
        bytes_emitted_total.labels(unit=unit).inc(emitted_bytes)


def record_duration(endpoint: str, seconds: float) -> None:
    request_duration_seconds.labels(endpoint=endpoint).observe(seconds)
