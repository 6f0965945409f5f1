"""
Canonical record schemas for the structuring pipeline.

All pipeline stages produce and consume these Pydantic v2 models.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Schema(str, Enum):
    """Record shape chosen once per blob."""
    EVENT = "EVENT"
    LOG = "LOG"


class DeclaredKind(str, Enum):
    """Caller's hint about what a blob contains."""
    EVENT_HINT = "EVENT_HINT"
    LOG_HINT = "LOG_HINT"
    NONE = "NONE"


class ContentKind(str, Enum):
    TEXT_EVENTS = "TEXT_EVENTS"
    TEXT_LOGS = "TEXT_LOGS"
    IMAGE = "IMAGE"
    AUDIO = "AUDIO"
    UNKNOWN = "UNKNOWN"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class Event(BaseModel):
    """One structured occurrence extracted from a chunk."""
    model_config = ConfigDict(frozen=True)

    event_timestamp: Optional[datetime] = None
    person: Optional[str] = None
    city: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    category: Optional[str] = None
    notes: Optional[str] = None
    parse_ok: bool = False
    source_line: str = Field(..., description="Verbatim chunk text")


class LogEvent(BaseModel):
    """One structured log line. ``message`` is always the full line."""
    model_config = ConfigDict(frozen=True)

    timestamp: Optional[datetime] = None
    level: Optional[str] = Field(default=None, description="INFO | WARN | ERROR | DEBUG")
    service: Optional[str] = None
    code: Optional[str] = None
    message: str


Record = Union[Event, LogEvent]


class StructureResult(BaseModel):
    """Schema chosen for a blob plus its records in chunk order."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    record_schema: Schema = Field(default=Schema.EVENT, alias="schema")
    records: list[Record] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Media attributes (metadata decoders)
# ---------------------------------------------------------------------------

class ImageAttributes(BaseModel):
    taken_at: Optional[datetime] = None
    camera_make: Optional[str] = None
    camera_model: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    has_gps: Optional[bool] = None
    lat: Optional[float] = None
    lon: Optional[float] = None


class AudioAttributes(BaseModel):
    duration_s: Optional[float] = None
    codec: Optional[str] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None


# ---------------------------------------------------------------------------
# API request / response envelopes
# ---------------------------------------------------------------------------

class IngestRequest(BaseModel):
    raw_text: str = Field(..., min_length=1)
    source: str = "paste"
    doc_type: Optional[str] = Field(default=None, description="Diary | Logs")


class IngestResponse(BaseModel):
    id: str
    kind: ContentKind
    record_schema: Optional[Schema] = Field(default=None, alias="schema")
    records: list[Record] = Field(default_factory=list)
    attributes: Optional[dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True)
