"""Prometheus metrics definitions for TeamHub."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "teamhub_http_requests_total",
    "Total number of HTTP requests processed by the TeamHub API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "teamhub_http_request_duration_seconds",
    "Latency of HTTP requests processed by the TeamHub API",
    ["method", "path"],
)

MEMBERSHIP_TRANSITIONS = Counter(
    "teamhub_membership_transitions_total",
    "Team membership rows written, by resulting status",
    ["status"],
)

DOMAIN_ERRORS = Counter(
    "teamhub_domain_errors_total",
    "Rejected operations by error kind",
    ["kind"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "MEMBERSHIP_TRANSITIONS",
    "DOMAIN_ERRORS",
]
