"""
SQLAlchemy models for raw ingests and their curated records.
"""
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, Numeric, String, Text

from app.database import Base


class FileIngestModel(Base):
    """Raw upload or pasted text, one row per ingestion."""
    __tablename__ = "file_ingest"

    id = Column(String, primary_key=True)
    filename = Column(String, nullable=False)
    content_type = Column(String, nullable=False, default="text/plain")
    file_kind = Column(String, nullable=False)  # TEXT_EVENTS, TEXT_LOGS, IMAGE, AUDIO, UNKNOWN
    raw_text = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class TextEventModel(Base):
    __tablename__ = "text_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    file_id = Column(String, nullable=False, index=True)
    idx = Column(Integer, nullable=False)  # chunk position within the ingest
    event_ts = Column(DateTime)
    person = Column(String)
    city = Column(String)
    amount = Column(Numeric(12, 2))
    category = Column(String)
    notes = Column(Text)  # preview only, see settings.NOTES_PREVIEW_CHARS
    parse_ok = Column(Boolean, nullable=False, default=False)
    source_line = Column(Text, nullable=False)


class LogEventModel(Base):
    __tablename__ = "log_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    file_id = Column(String, nullable=False, index=True)
    idx = Column(Integer, nullable=False)
    ts = Column(DateTime)
    level = Column(String)
    service = Column(String)
    code = Column(String)
    message = Column(Text, nullable=False)


class ImageFeatureModel(Base):
    __tablename__ = "image_features"

    id = Column(String, primary_key=True)
    filename = Column(String, nullable=False)
    taken_at = Column(DateTime)
    camera_make = Column(String)
    camera_model = Column(String)
    width = Column(Integer)
    height = Column(Integer)
    has_gps = Column(Boolean)
    lat = Column(Float)
    lon = Column(Float)


class AudioFeatureModel(Base):
    __tablename__ = "audio_features"

    id = Column(String, primary_key=True)
    filename = Column(String, nullable=False)
    duration_s = Column(Float)
    codec = Column(String)
    sample_rate = Column(Integer)
    channels = Column(Integer)
