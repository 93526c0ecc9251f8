"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "greffier_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "greffier_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "greffier_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Identity Metrics
# ============================================================

reconciliations_total = Counter(
    "greffier_reconciliations_total",
    "User reconciliations by resolution path",
    ["path"],
)

identity_drift_total = Counter(
    "greffier_identity_drift_total",
    "Records found with id and external subject id diverged",
)

# ============================================================
# Wallet Metrics
# ============================================================

wallet_operations_total = Counter(
    "greffier_wallet_operations_total",
    "Wallet binding operations by outcome",
    ["operation", "outcome"],
)
