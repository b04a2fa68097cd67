"""Integration tests for metrics endpoint."""

from __future__ import annotations


def test_metrics_endpoint_available(client):
    client.get("/healthz")
    response = client.get("/metrics")
    assert response.status_code == 200
    body = response.content.decode()
    assert "teamhub_http_requests_total" in body


def test_domain_errors_are_counted(client):
    client.patch("/tasks/12345", json={"title": "nope"})
    body = client.get("/metrics").content.decode()
    assert 'teamhub_domain_errors_total{kind="not_found"}' in body
