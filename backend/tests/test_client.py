"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

import asyncio
import base64

import pytest

from logs_adapter.models.schemas import AlertDefinition, ComponentLogsParams
from logs_adapter.openobserve.errors import (
    AlertNotFoundError,
    BackendResponseError,
    BackendStatusError,
    BackendTransportError,
    BackendUnavailableError,
)


def run(coro):
    return asyncio.run(coro)


def _params():
    return ComponentLogsParams.model_validate(
        {
            "projectId": "p1",
            "environmentId": "e1",
            "startTime": "2024-01-01T00:00:00Z",
            "endTime": "2024-01-02T00:00:00Z",
        }
    )


def _definition(name="high-error-rate"):
    return AlertDefinition(
        name=name, search_pattern="ERROR", threshold_value=10, duration=5, frequency=1
    )


def test_execute_search_sends_basic_auth(oo_client, backend):
    backend.search_body = {"took": 7, "hits": [{"log": "hello"}], "total": 1}
    res = run(oo_client.execute_search({"query": {"sql": "SELECT 1"}}))
    assert res.took == 7
    assert res.total == 1
    assert res.hits == [{"log": "hello"}]

    request = backend.calls("POST", "/api/default/_search")[0]
    expected = base64.b64encode(b"admin:secret").decode()
    assert request.headers["authorization"] == f"Basic {expected}"
    assert request.headers["content-type"] == "application/json"


def test_execute_search_non_200_is_status_error(oo_client, backend):
    backend.search_status = 400
    backend.search_body = {"message": "bad sql"}
    with pytest.raises(BackendStatusError) as exc:
        run(oo_client.execute_search({}))
    assert exc.value.status_code == 400
    assert "bad sql" in exc.value.body


def test_execute_search_transport_error(oo_client, backend):
    backend.raise_on = "_search"
    with pytest.raises(BackendTransportError):
        run(oo_client.execute_search({}))
    # No retry on failure
    assert len(backend.calls("POST", "/api/default/_search")) == 1


def test_execute_search_bad_envelope(oo_client, backend):
    backend.search_body = {"took": 1, "hits": "not-a-list", "total": 1}
    with pytest.raises(BackendResponseError):
        run(oo_client.execute_search({}))


def test_get_component_logs_normalizes_each_hit(oo_client, backend):
    backend.search_body = {
        "took": 12,
        "total": 2,
        "hits": [
            {"_timestamp": 1704067200000001, "log": "first", "logLevel": "INFO"},
            {"_timestamp": "garbage", "log": 5},
        ],
    }
    result = run(oo_client.get_component_logs(_params()))
    assert result.total_count == 2
    assert result.took == 12
    assert [e.log for e in result.logs] == ["first", ""]
    assert result.logs[0].log_level == "INFO"

    sent = backend.last_json("POST", "/api/default/_search")
    assert sent["query"]["size"] == 100
    assert sent["query"]["sql"].endswith("ORDER BY _timestamp DESC")


def test_get_component_logs_skips_non_object_hits(oo_client, backend):
    backend.search_body = {
        "took": 3,
        "total": 4,
        "hits": [{"log": "good"}, None, "stray", {"log": "also good"}],
    }
    result = run(oo_client.get_component_logs(_params()))
    assert [e.log for e in result.logs] == ["good", "also good"]
    assert result.total_count == 4


def test_create_alert_accepts_200_and_201(oo_client, backend):
    for status in (200, 201):
        backend.create_status = status
        run(oo_client.create_alert(_definition()))
    sent = backend.last_json("POST", "/api/v2/default/alerts")
    assert sent["name"] == "high-error-rate"
    assert sent["alert_type"] == "scheduled"


def test_create_alert_failure(oo_client, backend):
    backend.create_status = 409
    with pytest.raises(BackendStatusError) as exc:
        run(oo_client.create_alert(_definition()))
    assert exc.value.status_code == 409


def test_resolve_alert_id_first_match_wins(oo_client, backend):
    backend.alerts = [
        {"alert_id": "id-0", "name": "other"},
        {"alert_id": "id-1", "name": "dup"},
        {"alert_id": "id-2", "name": "dup"},
    ]
    assert run(oo_client.resolve_alert_id_by_name("dup")) == "id-1"


def test_resolve_alert_id_not_found(oo_client, backend):
    backend.alerts = [{"alert_id": "id-0", "name": "other"}]
    with pytest.raises(AlertNotFoundError) as exc:
        run(oo_client.resolve_alert_id_by_name("missing"))
    assert exc.value.name == "missing"


def test_delete_alert_resolves_then_deletes(oo_client, backend):
    backend.alerts = [{"alert_id": "abc123", "name": "high-error-rate"}]
    run(oo_client.delete_alert("high-error-rate"))
    methods = [(r.method, r.url.path) for r in backend.requests]
    assert methods == [
        ("GET", "/api/v2/default/alerts"),
        ("DELETE", "/api/v2/default/alerts/abc123"),
    ]


@pytest.mark.parametrize("status", [200, 204])
def test_delete_alert_accepts_200_and_204(oo_client, backend, status):
    backend.alerts = [{"alert_id": "abc123", "name": "rule"}]
    backend.delete_status = status
    run(oo_client.delete_alert("rule"))


def test_delete_alert_unknown_name_never_issues_delete(oo_client, backend):
    backend.alerts = [{"alert_id": "abc123", "name": "other"}]
    with pytest.raises(AlertNotFoundError):
        run(oo_client.delete_alert("high-error-rate"))
    assert backend.calls("DELETE") == []


def test_delete_alert_listing_failure_never_issues_delete(oo_client, backend):
    backend.list_status = 503
    with pytest.raises(BackendStatusError):
        run(oo_client.delete_alert("rule"))
    assert backend.calls("DELETE") == []


def test_check_health(oo_client, backend):
    run(oo_client.check_health())
    backend.health_body = {"status": "degraded"}
    with pytest.raises(BackendResponseError):
        run(oo_client.check_health())


def test_wait_until_healthy_retries_then_gives_up(oo_client, backend):
    backend.health_status = 503
    with pytest.raises(BackendUnavailableError):
        run(oo_client.wait_until_healthy(attempts=3, interval=0))
    assert len(backend.calls("GET", "/healthz")) == 3


def test_wait_until_healthy_recovers(oo_client, backend):
    backend.health_statuses = [503, 200]
    run(oo_client.wait_until_healthy(attempts=5, interval=0))
    assert len(backend.calls("GET", "/healthz")) == 2
