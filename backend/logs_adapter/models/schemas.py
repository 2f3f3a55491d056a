"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class LogQueryEnvelope(BaseModel):
    """First decoding pass of a log query: only the discriminator."""

    type: str


class ComponentLogsParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    component_ids: List[str] = Field(default_factory=list, alias="componentIds")
    project_id: str = Field(..., alias="projectId")
    environment_id: str = Field(..., alias="environmentId")
    start_time: datetime = Field(..., alias="startTime")
    end_time: datetime = Field(..., alias="endTime")
    search_phrase: str = Field("", alias="searchPhrase")
    log_levels: List[str] = Field(default_factory=list, alias="logLevels")
    limit: int = 0
    sort_order: str = Field("", alias="sortOrder")

    @field_validator("component_ids", "log_levels", mode="before")
    @classmethod
    def _null_list(cls, value):
        return [] if value is None else value

    @field_validator("search_phrase", "sort_order", mode="before")
    @classmethod
    def _null_str(cls, value):
        return "" if value is None else value

    @field_validator("start_time", "end_time")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _check_range(self):
        if self.start_time > self.end_time:
            raise ValueError("startTime must not be after endTime")
        return self


class LogEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime
    log: str = ""
    log_level: str = Field("", alias="logLevel")
    component_id: str = Field("", alias="componentId")
    environment_id: str = Field("", alias="environmentId")
    project_id: str = Field("", alias="projectId")
    namespace: str = ""
    pod_id: str = Field("", alias="podId")
    container_name: str = Field("", alias="containerName")
    labels: Dict[str, str] = Field(default_factory=dict)


class LogQueryResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    logs: List[LogEntry] = Field(default_factory=list)
    total_count: int = Field(0, alias="totalCount")
    took: int = 0


class SearchResponse(BaseModel):
    """Envelope returned by the OpenObserve search API."""

    took: int = 0
    # Items are checked one by one when normalized, not here
    hits: List[Any] = Field(default_factory=list)
    total: int = 0

    @field_validator("hits", mode="before")
    @classmethod
    def _null_hits(cls, value):
        return [] if value is None else value


class AlertDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    search_pattern: str = Field(..., alias="searchPattern")
    threshold_value: int = Field(..., alias="thresholdValue")
    duration: int
    frequency: int


class AlertRuleRequest(BaseModel):
    """Alert body as posted by callers; the rule name comes from the path."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    search_pattern: str = Field(..., alias="searchPattern")
    threshold_value: int = Field(..., alias="thresholdValue")
    duration: int
    frequency: int

    def to_definition(self, name: str) -> AlertDefinition:
        return AlertDefinition(
            name=name,
            search_pattern=self.search_pattern,
            threshold_value=self.threshold_value,
            duration=self.duration,
            frequency=self.frequency,
        )


class MessageResponse(BaseModel):
    message: str
