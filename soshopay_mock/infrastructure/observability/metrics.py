"""Prometheus metrics for logins, quotes and request latency"""

from prometheus_client import Counter, Histogram

login_counter = Counter(
    "soshopay_login_total",
    "Login attempts",
    ["outcome"],  # success | not_found | invalid_pin
)

quote_counter = Counter(
    "soshopay_quote_total",
    "Loan quotes calculated",
    ["product"],  # CASH | PAYGO
)

quote_amount_histogram = Histogram(
    "soshopay_quote_amount",
    "Principal or product price of quoted loans",
    ["product"],
    buckets=[100, 500, 1_000, 5_000, 10_000, 25_000, 50_000, 100_000],
)

application_counter = Counter(
    "soshopay_application_total",
    "Loan applications submitted",
    ["product"],
)

dashboard_counter = Counter(
    "soshopay_dashboard_builds_total",
    "Payment dashboards built",
)

request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_quote(product: str, amount: float) -> None:
    quote_counter.labels(product=product).inc()
    quote_amount_histogram.labels(product=product).observe(amount)
