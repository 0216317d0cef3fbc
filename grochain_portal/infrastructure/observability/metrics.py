"""Prometheus metrics for upstream API health, data fallbacks and view latency"""

from prometheus_client import Counter, Histogram

# Upstream GroChain API
api_call_counter = Counter(
    "grochain_api_calls_total",
    "Calls made to the GroChain backend",
    ["endpoint", "outcome"],  # ok | logical_error | http_error | transport_error
)

api_latency_histogram = Histogram(
    "grochain_api_latency_seconds",
    "GroChain backend response time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Demo data substituted for failed calls
fallback_counter = Counter(
    "grochain_data_fallbacks_total",
    "Backend failures answered with demo data",
    ["resource"],
)

# View service
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_api_call(endpoint: str, outcome: str, duration_seconds: float) -> None:
    """Record outcome and latency of one upstream call"""
    api_call_counter.labels(endpoint=endpoint, outcome=outcome).inc()
    api_latency_histogram.observe(duration_seconds)
