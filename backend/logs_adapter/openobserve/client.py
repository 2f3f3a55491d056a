"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

import asyncio
import logging
from time import perf_counter
from typing import Any, Collection, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..logs.normalizer import normalize
from ..metrics.metrics import BACKEND_ERRORS_TOTAL, BACKEND_LATENCY
from ..models.schemas import AlertDefinition, ComponentLogsParams, LogQueryResult, SearchResponse
from .errors import (
    AlertNotFoundError,
    BackendResponseError,
    BackendStatusError,
    BackendTransportError,
    BackendUnavailableError,
    OpenObserveError,
)
from .queries import DEFAULT_ALERT_DESTINATION, build_alert_config, build_component_logs_query


logger = logging.getLogger("openobserve.client")


class OpenObserveClient:
    """Async HTTP client for the OpenObserve search and alert APIs.

    - One pooled httpx.AsyncClient with basic auth and a fixed timeout.
    - Built once at startup and shared by every request; never mutated.
    - Failed calls are never retried here; the caller decides.
    - Alerts are created by name but deleted by ID, so deletion first
      resolves the ID from the alert listing.
    """

    def __init__(
        self,
        base_url: str,
        org: str,
        stream: str,
        user: str,
        password: str,
        *,
        destination: str = DEFAULT_ALERT_DESTINATION,
        timeout: float = 30.0,
        health_timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._org = org
        self._stream = stream
        self._destination = destination
        self._health_timeout = health_timeout
        self._client = httpx.AsyncClient(
            auth=httpx.BasicAuth(user, password),
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "OpenObserveClient":
        return cls(
            settings.OPENOBSERVE_URL,
            settings.OPENOBSERVE_ORG,
            settings.OPENOBSERVE_STREAM,
            settings.OPENOBSERVE_USER,
            settings.OPENOBSERVE_PASSWORD,
            destination=settings.ALERT_DESTINATION,
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
            health_timeout=settings.HEALTH_CHECK_TIMEOUT_SECONDS,
            transport=transport,
        )

    @property
    def stream(self) -> str:
        return self._stream

    def _alerts_url(self) -> str:
        return f"{self._base_url}/api/v2/{self._org}/alerts"

    async def aclose(self) -> None:
        await self._client.aclose()

    # Transport helpers
    async def _send(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        json: Any = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        kwargs = {}
        if json is not None:
            kwargs["json"] = json
        if timeout is not None:
            kwargs["timeout"] = timeout
        t0 = perf_counter()
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            BACKEND_ERRORS_TOTAL.labels(operation=operation, kind="transport").inc()
            logger.error(
                "openobserve.request.failed",
                extra={"operation": operation, "url": url, "error": repr(e)},
            )
            raise BackendTransportError(f"failed to execute {operation} request: {e}") from e
        finally:
            BACKEND_LATENCY.labels(operation=operation).observe((perf_counter() - t0) * 1000)

    def _check_status(
        self, operation: str, resp: httpx.Response, accepted: Collection[int]
    ) -> None:
        if resp.status_code in accepted:
            return
        BACKEND_ERRORS_TOTAL.labels(operation=operation, kind="status").inc()
        logger.error(
            "openobserve.response.error",
            extra={"operation": operation, "status_code": resp.status_code, "body": resp.text},
        )
        raise BackendStatusError(resp.status_code, resp.text, operation=operation)

    def _decode(self, operation: str, resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            BACKEND_ERRORS_TOTAL.labels(operation=operation, kind="decode").inc()
            logger.error(
                "openobserve.response.undecodable",
                extra={"operation": operation, "body": resp.text[:200]},
            )
            raise BackendResponseError(f"failed to decode {operation} response: {e}") from e

    # Search
    async def execute_search(self, query: dict) -> SearchResponse:
        url = f"{self._base_url}/api/{self._org}/_search"
        resp = await self._send("search", "POST", url, json=query)
        self._check_status("search", resp, (200,))
        data = self._decode("search", resp)
        try:
            return SearchResponse.model_validate(data)
        except ValidationError as e:
            BACKEND_ERRORS_TOTAL.labels(operation="search", kind="decode").inc()
            logger.error("openobserve.search.bad_envelope", extra={"error": str(e)})
            raise BackendResponseError(f"unexpected search response: {e}") from e

    async def get_component_logs(self, params: ComponentLogsParams) -> LogQueryResult:
        query = build_component_logs_query(params, self._stream)
        res = await self.execute_search(query)
        logs = []
        for position, hit in enumerate(res.hits):
            if not isinstance(hit, dict):
                logger.warning(
                    "openobserve.search.hit_skipped",
                    extra={"position": position, "hit_type": type(hit).__name__},
                )
                continue
            logs.append(normalize(hit))
        return LogQueryResult(
            logs=logs,
            total_count=res.total,
            took=res.took,
        )

    # Alerts
    async def create_alert(self, definition: AlertDefinition) -> None:
        config = build_alert_config(definition, self._stream, self._destination)
        resp = await self._send("create_alert", "POST", self._alerts_url(), json=config)
        self._check_status("create_alert", resp, (200, 201))
        logger.info("openobserve.alert.created", extra={"alert": definition.name})

    async def resolve_alert_id_by_name(self, name: str) -> str:
        """Return the ID of the first listed alert named ``name``.

        Names are not unique in OpenObserve; duplicates resolve to whichever
        the listing returns first.
        """
        resp = await self._send("list_alerts", "GET", self._alerts_url())
        self._check_status("list_alerts", resp, (200,))
        data = self._decode("list_alerts", resp)
        alerts = data.get("list") if isinstance(data, dict) else None
        if alerts is not None and not isinstance(alerts, list):
            raise BackendResponseError("unexpected alert listing: 'list' is not an array")

        for alert in alerts or []:
            if isinstance(alert, dict) and alert.get("name") == name:
                alert_id = alert.get("alert_id")
                if not isinstance(alert_id, str) or not alert_id:
                    raise BackendResponseError(f"alert {name!r} listed without an alert_id")
                return alert_id

        logger.warning("openobserve.alert.not_found", extra={"alert": name})
        raise AlertNotFoundError(name)

    async def delete_alert(self, name: str) -> None:
        """Delete an alert by name: resolve its ID, then delete by ID.

        The two calls are not atomic; the alert may change in between.
        """
        alert_id = await self.resolve_alert_id_by_name(name)
        url = f"{self._alerts_url()}/{quote(alert_id, safe='')}"
        resp = await self._send("delete_alert", "DELETE", url)
        self._check_status("delete_alert", resp, (200, 204))
        logger.info("openobserve.alert.deleted", extra={"alert": name, "alert_id": alert_id})

    # Health
    async def check_health(self) -> None:
        url = f"{self._base_url}/healthz"
        resp = await self._send("health", "GET", url, timeout=self._health_timeout)
        self._check_status("health", resp, (200,))
        data = self._decode("health", resp)
        status = data.get("status") if isinstance(data, dict) else None
        if status != "ok":
            raise BackendResponseError(f"unexpected health status: {status!r}")

    async def wait_until_healthy(self, attempts: int, interval: float) -> None:
        for attempt in range(1, attempts + 1):
            try:
                await self.check_health()
            except OpenObserveError as e:
                logger.warning(
                    "openobserve.health.not_ready",
                    extra={"attempt": attempt, "attempts": attempts, "error": str(e)},
                )
            else:
                logger.info("openobserve.health.ok", extra={"attempt": attempt})
                return
            if attempt < attempts:
                await asyncio.sleep(interval)
        raise BackendUnavailableError(
            f"OpenObserve did not become healthy after {attempts} attempts"
        )
