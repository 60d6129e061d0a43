# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Prometheus metrics for the pet-care tracker."""
from prometheus_client import Counter, Histogram

FAMILIES_CREATED = Counter(
    "families_created_total",
    "Total families created",
)
TASKS_COMPLETED = Counter(
    "tasks_completed_total",
    "Total task completions",
    ["category"],
)
TASKS_RESET = Counter(
    "tasks_reset_total",
    "Total task resets",
    ["category"],
)
SMS_SENT = Counter(
    "sms_notifications_total",
    "SMS notifications attempted, by outcome",
    ["status"],
)
SMS_LATENCY = Histogram(
    "sms_send_seconds",
    "Time spent calling the SMS provider",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)
REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request latency", ["method", "endpoint"]
)
HTTP_ERRORS = Counter(
    "http_errors_total", "Total HTTP errors", ["method", "endpoint", "status"]
)
