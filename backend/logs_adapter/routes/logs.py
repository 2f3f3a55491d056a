"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from ..models.schemas import ComponentLogsParams, LogQueryEnvelope, LogQueryResult
from ..metrics.metrics import track_request
from ..openobserve.client import OpenObserveClient
from ..openobserve.errors import OpenObserveError
from ..utils.disconnect import cancel_on_disconnect
from .deps import get_openobserve


logger = logging.getLogger("routes.logs")

router = APIRouter()

SUPPORTED_QUERY_TYPES = ("component",)


@router.post("/query", response_model=LogQueryResult)
async def query_logs(request: Request, client: OpenObserveClient = Depends(get_openobserve)):
    """Run a typed log query.

    The body is read once and decoded twice: first for the ``type``
    discriminator, then as the payload of that query type.
    """
    with track_request("logs_query"):
        body = await request.body()

        try:
            envelope = LogQueryEnvelope.model_validate_json(body)
        except ValidationError as e:
            logger.error("logs.query.bad_body", extra={"error": str(e)})
            raise HTTPException(status_code=400, detail="Invalid request body") from e

        if envelope.type != "component":
            logger.error("logs.query.unknown_type", extra={"type": envelope.type})
            supported = ", ".join(f'"{t}"' for t in SUPPORTED_QUERY_TYPES)
            raise HTTPException(
                status_code=400,
                detail=f"Unknown log query type: {envelope.type}. Supported types are {supported}",
            )

        try:
            params = ComponentLogsParams.model_validate_json(body)
        except ValidationError as e:
            logger.error("logs.query.bad_params", extra={"error": str(e)})
            raise HTTPException(status_code=400, detail="Invalid component logs params") from e
        try:
            return await cancel_on_disconnect(request, client.get_component_logs(params))
        except OpenObserveError as e:
            logger.error("logs.query.failed", extra={"error": str(e)})
            raise HTTPException(status_code=500, detail="Failed to fetch component logs") from e
