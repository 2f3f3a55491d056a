"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from ..models.schemas import LogEntry
from ..openobserve import fields


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _str(src: Dict[str, Any], key: str) -> str:
    value = src.get(key)
    return value if isinstance(value, str) else ""


def _timestamp(src: Dict[str, Any]) -> datetime:
    raw = src.get(fields.TIMESTAMP)
    # bool is an int subclass but never a valid timestamp
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return EPOCH
    try:
        return EPOCH + timedelta(microseconds=int(raw))
    except (OverflowError, ValueError):
        return EPOCH


def normalize(hit: Dict[str, Any]) -> LogEntry:
    """Map one OpenObserve hit onto a LogEntry.

    Missing or mistyped fields become empty values; this never raises.
    """
    labels: Dict[str, str] = {}
    raw_labels = hit.get(fields.LABELS)
    if isinstance(raw_labels, dict):
        labels = {k: v for k, v in raw_labels.items() if isinstance(k, str) and isinstance(v, str)}

    return LogEntry(
        timestamp=_timestamp(hit),
        log=_str(hit, fields.LOG),
        log_level=_str(hit, fields.LOG_LEVEL),
        component_id=_str(hit, fields.COMPONENT_ID),
        environment_id=_str(hit, fields.ENVIRONMENT_ID),
        project_id=_str(hit, fields.PROJECT_ID),
        namespace=_str(hit, fields.NAMESPACE),
        pod_id=_str(hit, fields.POD_ID),
        container_name=_str(hit, fields.CONTAINER_NAME),
        labels=labels,
    )


def is_unparsable_timestamp(entry: LogEntry) -> bool:
    return entry.timestamp == EPOCH
