"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

from typing import Optional


class OpenObserveError(Exception):
    """Base class for every failure talking to OpenObserve."""


class BackendTransportError(OpenObserveError):
    """Network failure or timeout before a response was received."""


class BackendStatusError(OpenObserveError):
    def __init__(self, status_code: int, body: str, operation: Optional[str] = None) -> None:
        self.status_code = status_code
        self.body = body
        self.operation = operation
        super().__init__(f"openobserve returned status {status_code}: {body}")


class BackendResponseError(OpenObserveError):
    """The backend answered with a body that could not be decoded."""


class AlertNotFoundError(OpenObserveError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"alert {name!r} not found")


class BackendUnavailableError(OpenObserveError):
    """OpenObserve never reported healthy during startup."""
