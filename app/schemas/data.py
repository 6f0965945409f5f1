"""
Editable-column schemas for ``PATCH /api/data/{kind}/{id}``.

Unknown fields are rejected so callers cannot touch identifiers or
columns that do not exist on the target table.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Update(BaseModel):
    model_config = ConfigDict(extra="forbid")


class TextEventUpdate(_Update):
    event_ts: Optional[datetime] = None
    person: Optional[str] = None
    city: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    category: Optional[str] = None
    notes: Optional[str] = None
    parse_ok: Optional[bool] = None


class LogEventUpdate(_Update):
    ts: Optional[datetime] = None
    level: Optional[str] = Field(default=None, pattern=r"^(INFO|WARN|ERROR|DEBUG)$")
    service: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None


class ImageFeatureUpdate(_Update):
    filename: Optional[str] = None
    taken_at: Optional[datetime] = None
    camera_make: Optional[str] = None
    camera_model: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    has_gps: Optional[bool] = None
    lat: Optional[float] = None
    lon: Optional[float] = None


class AudioFeatureUpdate(_Update):
    filename: Optional[str] = None
    duration_s: Optional[float] = None
    codec: Optional[str] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None
