"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
def healthz():
    # Backend reachability is checked once at startup, not per liveness check.
    return {"status": "ok"}
