"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from . import fields
from ..models.schemas import AlertDefinition, ComponentLogsParams


logger = logging.getLogger("openobserve.queries")

DEFAULT_LIMIT = 100
DEFAULT_ALERT_DESTINATION = "openchoreo_alerts"

# Sort direction is rendered outside quotes, so only these inputs select ASC
_ASCENDING = {"ASC", "asc"}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def escape_sql_string(value: str) -> str:
    """Escape a value for embedding inside a single-quoted SQL literal."""
    return value.replace("\\", "\\\\").replace("'", "''")


def normalize_sort_order(order: Optional[str]) -> str:
    return "ASC" if order in _ASCENDING else "DESC"


def normalize_limit(limit: Optional[int]) -> int:
    if limit is None or limit <= 0:
        return DEFAULT_LIMIT
    return limit


def to_epoch_micros(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds


def _equals(column: str, value: str) -> str:
    return f"{column} = '{escape_sql_string(value)}'"


def _any_of(column: str, values: List[str]) -> str:
    return "(" + " OR ".join(_equals(column, v) for v in values) + ")"


def build_component_logs_query(params: ComponentLogsParams, stream: str) -> Dict[str, Any]:
    """Build the OpenObserve search document for component logs.

    - Project and environment are always filtered on.
    - An empty component list means every component in that scope.
    - Search phrase is a LIKE substring match on the log text.
    - Log levels are OR-combined.
    - Time range travels as microsecond bounds, not inside the SQL.
    """
    conditions: List[str] = [
        _equals(fields.PROJECT_ID, params.project_id),
        _equals(fields.ENVIRONMENT_ID, params.environment_id),
    ]

    if params.component_ids:
        conditions.append(_any_of(fields.COMPONENT_ID, params.component_ids))

    if params.search_phrase:
        conditions.append(f"{fields.LOG} LIKE '%{escape_sql_string(params.search_phrase)}%'")

    if params.log_levels:
        conditions.append(_any_of(fields.LOG_LEVEL, params.log_levels))

    sql = f"SELECT * FROM {stream} WHERE " + " AND ".join(conditions)
    sql += f" ORDER BY {fields.TIMESTAMP} {normalize_sort_order(params.sort_order)}"

    query: Dict[str, Any] = {
        "query": {
            "sql": sql,
            "start_time": to_epoch_micros(params.start_time),
            "end_time": to_epoch_micros(params.end_time),
            "from": 0,
            "size": normalize_limit(params.limit),
        },
        "timeout": 0,
    }
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "openobserve.query.component_logs",
            extra={"stream": stream, "query": json.dumps(query, indent=4)},
        )
    return query


def build_alert_config(
    definition: AlertDefinition,
    stream: str,
    destination: str = DEFAULT_ALERT_DESTINATION,
) -> Dict[str, Any]:
    """Build a scheduled alert that fires when matching lines exceed the threshold."""
    query = (
        f'SELECT count(*) as {fields.MATCH_COUNT} FROM "{stream}" '
        f"WHERE str_match({fields.LOG}, '{escape_sql_string(definition.search_pattern)}')"
    )
    alert: Dict[str, Any] = {
        "name": definition.name,
        "stream_name": stream,
        "query": query,
        "condition": {
            "column": fields.MATCH_COUNT,
            "operator": ">",
            "value": definition.threshold_value,
        },
        "duration": definition.duration,
        "frequency": definition.frequency,
        "is_realtime": "no",
        "destinations": [destination],
        "alert_type": "scheduled",
    }
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "openobserve.query.alert_config",
            extra={"alert": definition.name, "config": json.dumps(alert, indent=4)},
        )
    return alert
