"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from logs_adapter.config import Settings
from logs_adapter.main import create_app
from logs_adapter.openobserve.client import OpenObserveClient


BASE_URL = "http://openobserve:5080"


class StubOpenObserve:
    """In-memory stand-in for the OpenObserve HTTP API."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.search_status = 200
        self.search_body: Any = {"took": 0, "hits": [], "total": 0}
        self.alerts: List[Dict[str, Any]] = []
        self.list_status = 200
        self.create_status = 201
        self.delete_status = 200
        self.health_status = 200
        self.health_body: Any = {"status": "ok"}
        # Consumed one per health check before falling back to health_status
        self.health_statuses: List[int] = []
        self.raise_on: Optional[str] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.raise_on and path.endswith(self.raise_on):
            raise httpx.ConnectError("connection refused", request=request)
        if path == "/healthz":
            status = self.health_statuses.pop(0) if self.health_statuses else self.health_status
            return httpx.Response(status, json=self.health_body)
        if path == "/api/default/_search":
            return httpx.Response(self.search_status, json=self.search_body)
        if path == "/api/v2/default/alerts":
            if request.method == "GET":
                return httpx.Response(self.list_status, json={"list": self.alerts})
            return httpx.Response(self.create_status, json={"code": self.create_status})
        if path.startswith("/api/v2/default/alerts/") and request.method == "DELETE":
            alert_id = path.rsplit("/", 1)[1]
            if alert_id not in {a.get("alert_id") for a in self.alerts}:
                return httpx.Response(404, text=f"no alert with id {alert_id}")
            return httpx.Response(self.delete_status, json={"code": self.delete_status})
        return httpx.Response(404, text="not found")

    def calls(self, method: str, path_prefix: str = "") -> List[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path.startswith(path_prefix)
        ]

    def last_json(self, method: str, path_prefix: str = "") -> Any:
        return json.loads(self.calls(method, path_prefix)[-1].content)


@pytest.fixture
def settings():
    return Settings(
        OPENOBSERVE_URL=BASE_URL,
        OPENOBSERVE_ORG="default",
        OPENOBSERVE_STREAM="default",
        OPENOBSERVE_USER="admin",
        OPENOBSERVE_PASSWORD="secret",
        HEALTH_CHECK_ATTEMPTS=3,
        HEALTH_CHECK_INTERVAL_SECONDS=0,
    )


@pytest.fixture
def backend():
    return StubOpenObserve()


@pytest.fixture
def oo_client(settings, backend):
    return OpenObserveClient.from_settings(settings, transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def app(settings, oo_client):
    return create_app(settings, client=oo_client)


@pytest.fixture
def client(app):
    # No context manager: the startup health check is exercised separately
    return TestClient(app)
