"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from ..models.schemas import AlertRuleRequest, MessageResponse
from ..metrics.metrics import track_request
from ..openobserve.client import OpenObserveClient
from ..openobserve.errors import AlertNotFoundError, OpenObserveError
from ..utils.disconnect import cancel_on_disconnect
from .deps import get_openobserve


logger = logging.getLogger("routes.alerts")

router = APIRouter()


def _require_rule_name(rule_name: str) -> str:
    if not rule_name or not rule_name.strip():
        logger.error("alerts.rule_name.missing")
        raise HTTPException(status_code=400, detail="Rule name is required")
    return rule_name


@router.api_route("/rules/", methods=["POST", "DELETE"], include_in_schema=False)
def missing_rule_name():
    _require_rule_name("")


@router.post("/rules/{rule_name}", response_model=MessageResponse, status_code=201)
async def create_alert(
    rule_name: str,
    request: Request,
    client: OpenObserveClient = Depends(get_openobserve),
):
    with track_request("alerts_create"):
        name = _require_rule_name(rule_name)

        try:
            payload = AlertRuleRequest.model_validate_json(await request.body())
        except ValidationError as e:
            logger.error("alerts.create.bad_body", extra={"alert": name, "error": str(e)})
            raise HTTPException(status_code=400, detail="Invalid request body") from e

        # The path is the addressing scheme; any name in the body is ignored
        definition = payload.to_definition(name)
        try:
            await cancel_on_disconnect(request, client.create_alert(definition))
        except OpenObserveError as e:
            logger.error("alerts.create.failed", extra={"alert": name, "error": str(e)})
            raise HTTPException(status_code=500, detail="Failed to create alert") from e
        return {"message": "Alert created successfully"}


@router.delete("/rules/{rule_name}", response_model=MessageResponse)
async def delete_alert(
    rule_name: str,
    request: Request,
    client: OpenObserveClient = Depends(get_openobserve),
):
    with track_request("alerts_delete"):
        name = _require_rule_name(rule_name)

        try:
            await cancel_on_disconnect(request, client.delete_alert(name))
        except AlertNotFoundError as e:
            # Same status as other backend failures; kept distinct in the logs
            logger.warning("alerts.delete.not_found", extra={"alert": name})
            raise HTTPException(status_code=500, detail="Failed to delete alert") from e
        except OpenObserveError as e:
            logger.error("alerts.delete.failed", extra={"alert": name, "error": str(e)})
            raise HTTPException(status_code=500, detail="Failed to delete alert") from e
        return {"message": "Alert deleted successfully"}
