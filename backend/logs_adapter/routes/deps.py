"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

from fastapi import Request

from ..openobserve.client import OpenObserveClient


def get_openobserve(request: Request) -> OpenObserveClient:
    # Built once in create_app and shared read-only by every request
    return request.app.state.openobserve
